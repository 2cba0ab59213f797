"""
Surrogate paths and significance of the mutual information.
"""

import logging
import numpy as np
from typing import Tuple

from . import commons
from .core import MutualInformation
from .structs import SensorimotorPath

logger = logging.getLogger(__name__)


def _randomize_phase(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    n_dims, n_pts = x.shape
    z = x.copy()
    for d in range(n_dims):
        fft_x = np.fft.fft(z[d, :])
        magnitudes = np.abs(fft_x)
        phases = rng.uniform(0, 2 * np.pi, n_pts)
        # Ensure conjugate symmetry for real output
        if n_pts % 2 == 0:
            phases[n_pts // 2] = 0
        phases[0] = 0
        phases[n_pts // 2 + 1:] = -phases[1:(n_pts + 1) // 2][::-1]
        fft_new = magnitudes * np.exp(1j * phases)
        z[d, :] = np.real(np.fft.ifft(fft_new))
    return z


def surrogate(path: SensorimotorPath, rng: np.random.Generator,
              method: int = 0) -> SensorimotorPath:
    """
    Create a surrogate version of the path, where the actions are independent
    of the observations.

    The observations and the timestamps are unchanged.

    Parameters
    ----------
    path : SensorimotorPath
        Trajectory
    rng : np.random.Generator
        Source of randomness
    method : int
        Surrogate method:
        - 0: shuffle (random permutation of the actions in time)
        - 1: randomize the phase of the actions with FFT (same power spectrum)

    Returns
    -------
    SensorimotorPath
        Surrogate path with the same length and timestamps
    """
    observations, actions = path.to_arrays()

    if method == 0:
        actions = actions[:, rng.permutation(actions.shape[1])]
    elif method == 1:
        actions = _randomize_phase(actions, rng)
    else:
        raise commons.UnsupportedConfiguration(f"unknown surrogate method {method}")

    new = SensorimotorPath()
    for pair, y in zip(path, actions.T):
        new.append(pair.observation, y, pair.t)
    return new


def surrogate_test(path: SensorimotorPath, rng: np.random.Generator,
                   n_surrogates: int = 19, k: int = commons.k_default,
                   method: int = 0) -> Tuple[float, np.ndarray, float]:
    """
    Test the mutual information of the path against independent surrogates.

    Parameters
    ----------
    path : SensorimotorPath
        Trajectory
    rng : np.random.Generator
        Source of randomness for the surrogates
    n_surrogates : int
        Number of surrogate paths
    k : int
        Number of neighbours
    method : int
        Surrogate method (see surrogate)

    Returns
    -------
    Tuple[float, np.ndarray, float]
        (MI of the path, MI of each surrogate, one-sided p-value)
    """
    if n_surrogates < 1:
        raise ValueError("at least one surrogate is needed")
    mi = MutualInformation(k=k)
    I = mi.calculate(path)
    I_surr = np.array([mi.calculate(surrogate(path, rng, method)) for _ in range(n_surrogates)])
    p_value = (1 + np.count_nonzero(I_surr >= I)) / (n_surrogates + 1)
    logger.info("MI = %.4f, surrogates %.4f +/- %.4f, p = %.3f",
                I, I_surr.mean(), I_surr.std(), p_value)
    return I, I_surr, float(p_value)
