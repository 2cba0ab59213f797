"""
Information metrics computed from the binned values of a sensorimotor path.

It is not possible to access world states from the robot/system, hence only
"traces" of the sensor and actuator values are used.

All metrics are in nats by default, like the k-NN mutual information. A value
in nats is converted to base b by dividing it by ln(b): bits are nats / ln(2),
and decimal digits (log10) are nats / ln(10).
"""

import logging
import math
import warnings
import numpy as np
from scipy.special import entr
from typing import Optional, Union

from . import commons
from .commons import InfoType, choose
from .converter import BinnedVariables, RandomVariableConverter
from .structs import SensorimotorPath

logger = logging.getLogger(__name__)


def uncertainty(p: np.ndarray, base: float = commons.log_base_default) -> float:
    """
    Shannon entropy H = -sum_i p_i log(p_i) of one binned distribution.

    Parameters
    ----------
    p : np.ndarray
        Probabilities (normalized frequencies), zeros are allowed
    base : float
        Logarithm base (default e, i.e. nats)

    Returns
    -------
    float
        Entropy in units of log(base)
    """
    p = np.asarray(p, dtype=np.float64).ravel()
    if base <= 0 or base == 1:
        raise ValueError(f"invalid logarithm base {base}")
    if np.any(p < 0):
        raise ValueError("probabilities must be non-negative")
    total = p.sum()
    if abs(total - 1.0) > 1e-6:
        warnings.warn(f"probabilities sum to {total}, not 1", RuntimeWarning)
    return float(np.sum(entr(p)) / math.log(base))


class Information:
    """
    Information metric of a given InfoType on a sensorimotor path.

    Parameters
    ----------
    info_type : InfoType
        Metric to compute
    path : SensorimotorPath, optional
        Trajectory with values normalized to [0, 1]
    nof_bins : int
        Number of bins used to estimate probabilities
    base : float
        Logarithm base of the results (default e)
    """

    def __init__(self, info_type: Union[InfoType, int, str] = InfoType.SENSORIMOTOR_ENTROPY,
                 path: Optional[SensorimotorPath] = None,
                 nof_bins: int = commons.nof_bins_default,
                 base: float = commons.log_base_default):
        self.info_type = info_type
        self.path = path
        self.converter = RandomVariableConverter(nof_bins)
        self.base = base

    @property
    def info_type(self) -> InfoType:
        return self._info_type

    @info_type.setter
    def info_type(self, value):
        self._info_type = choose(InfoType, value)

    def uncertainty(self, p: np.ndarray) -> float:
        return uncertainty(p, self.base)

    def calculate_joint_random_variables(self) -> BinnedVariables:
        """Bin the sensor and motor values of the path."""
        self.converter.path = self.path
        try:
            return self.converter.calculate_joint_random_variables()
        finally:
            self.converter.path = None

    def calculate(self) -> float:
        """
        Compute the selected metric.

        Raises
        ------
        NotImplementedError
            For the metrics that are not available yet (e.g. empowerment)
        """
        if self.info_type == InfoType.SENSORIMOTOR_ENTROPY:
            return self._sensorimotor_entropy()
        if self.info_type == InfoType.EMPOWERMENT:
            return self._empowerment()
        raise NotImplementedError(f"{self.info_type.name} is not implemented")

    def _sensorimotor_entropy(self) -> float:
        # sum of the marginal entropies of every sensor and motor dimension
        binned = self.calculate_joint_random_variables()
        H = sum(self.uncertainty(p) for p in binned.sensorimotor)
        logger.debug("sensorimotor entropy over %d dimensions: %.6f",
                     binned.sensorimotor.shape[0], H)
        return H

    def _empowerment(self) -> float:
        # TODO: channel capacity from actions to future observations (Klyubin et al.)
        raise NotImplementedError("empowerment is not implemented")
