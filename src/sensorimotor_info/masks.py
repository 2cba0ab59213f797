"""
Masking utilities for handling missing data in sensorimotor paths.
"""

import logging
import warnings
import numpy as np

from .structs import SensorimotorPath

logger = logging.getLogger(__name__)


def no_NaN(path: SensorimotorPath) -> bool:
    """
    Check if all observation and action values are finite.

    Parameters
    ----------
    path : SensorimotorPath
        Trajectory

    Returns
    -------
    bool
        True if all values are finite, False otherwise
    """
    return bool(mask_finite(path).all())


def mask_finite(path: SensorimotorPath) -> np.ndarray:
    """
    Create a mask of the samples with finite values only.

    A sample is valid when all components of both its observation and its
    action are finite (AND logic over dimensions).

    Returns
    -------
    np.ndarray
        Mask of type int8 and length len(path), where 1 indicates a valid sample
    """
    if len(path) == 0:
        return np.zeros(0, dtype='i1')
    container = path.snapshot()
    valid = (np.isfinite(container.observations).all(axis=1)
             & np.isfinite(container.actions).all(axis=1))
    return valid.astype('i1')


def retain_from_mask(path: SensorimotorPath, mask: np.ndarray) -> SensorimotorPath:
    """
    Extract the samples corresponding to valid mask values.

    Parameters
    ----------
    path : SensorimotorPath
        Trajectory
    mask : np.ndarray
        Mask array of length len(path)

    Returns
    -------
    SensorimotorPath
        New path with the samples where mask > 0, timestamps unchanged
    """
    y = np.asarray(mask).astype('i1')
    if y.size != len(path):
        raise ValueError(f"mask of size {y.size} for a path of length {len(path)}")
    return SensorimotorPath([pair for pair, keep in zip(path, y) if keep > 0])


def clean(path: SensorimotorPath) -> SensorimotorPath:
    """Remove the samples containing NaN or inf values."""
    mask = mask_finite(path)
    n_removed = int(mask.size - np.count_nonzero(mask))
    if n_removed > 0:
        warnings.warn(f"removing {n_removed} samples with non-finite values", RuntimeWarning)
        logger.info("%d of %d samples removed", n_removed, mask.size)
    return retain_from_mask(path, mask)
