"""
Conversion of a sensorimotor trajectory towards a random variable representation,
by (fixed) binning.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from . import commons
from .commons import InsufficientSamples
from .structs import SensorimotorPath


@dataclass(frozen=True, eq=False)
class BinnedVariables:
    """
    Probabilities of the binned sensor and motor values.

    Row d of an array is the distribution of dimension d over the bins.
    """
    sensor: np.ndarray          # (n_dims_x, nof_bins)
    motor: np.ndarray           # (n_dims_y, nof_bins)
    sensorimotor: np.ndarray    # (n_dims_x + n_dims_y, nof_bins)


class RandomVariableConverter:
    """
    Fixed-width binning of normalized values.

    Parameters
    ----------
    nof_bins : int
        Number of bins, the bin width is 1/nof_bins
    path : SensorimotorPath, optional
        Trajectory to convert, with values in [0, 1]
    """

    def __init__(self, nof_bins: int = commons.nof_bins_default,
                 path: Optional[SensorimotorPath] = None):
        self.nof_bins = nof_bins
        self.path = path

    @property
    def nof_bins(self) -> int:
        return self._nof_bins

    @nof_bins.setter
    def nof_bins(self, value: int):
        if int(value) != value or value <= 0:
            raise ValueError(f"number of bins must be a positive integer, got {value}")
        self._nof_bins = int(value)
        self._bin_width = 1.0 / self._nof_bins

    @property
    def bin_width(self) -> float:
        return self._bin_width

    def get_bin(self, value: float) -> int:
        """
        Bin index of a value normalized to [0, 1].

        With 4 bins, they span [0, 0.25[ [0.25, 0.5[ [0.5, 0.75[ [0.75, 1.0]: 0.66 / 0.25
        is 2 and something, so 0.66 is in bin 2. The value 1.0 is the only exception,
        it falls in the last bin.
        """
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"value {value} is not normalized to [0, 1]")
        if value == 1.0:
            return self._nof_bins - 1
        return min(int(value * self._nof_bins), self._nof_bins - 1)

    def get_bins(self, values: np.ndarray) -> np.ndarray:
        """Vectorised get_bin."""
        values = np.asarray(values, dtype=np.float64)
        if not np.all((values >= 0.0) & (values <= 1.0)):
            raise ValueError("values are not normalized to [0, 1]")
        bins = np.floor(values * self._nof_bins).astype(np.int64)
        return np.minimum(bins, self._nof_bins - 1)

    def _probabilities(self, values: np.ndarray) -> np.ndarray:
        # values: (n_dims, n_pts) -> (n_dims, nof_bins)
        n_dims, n_pts = values.shape
        bins = self.get_bins(values)
        freq = np.zeros((n_dims, self._nof_bins), dtype=np.float64)
        for d in range(n_dims):
            freq[d] = np.bincount(bins[d], minlength=self._nof_bins)
        return freq / n_pts

    def calculate_joint_random_variables(self) -> BinnedVariables:
        """
        Probability of each bin, for each sensor and each motor dimension.

        The sensor input S[t=0]={0.1, 0.2, 0.1}, S[t=1]={0.1, 0.8, 0.1},
        S[t=2]={0.1, 0.8, 0.8} gives with two bins the frequencies
        {3, 0 : 1, 2 : 2, 1}, hence the probabilities {1, 0 : 0.33, 0.67 : 0.67, 0.33}.
        The dimensions are considered independent.

        Returns
        -------
        BinnedVariables
            sensor, motor and sensorimotor probability arrays
        """
        if self.path is None or len(self.path) == 0:
            raise InsufficientSamples("no sensorimotor path to convert")

        observations, actions = self.path.to_arrays()
        sensor = self._probabilities(observations)
        motor = self._probabilities(actions)
        return BinnedVariables(sensor=sensor, motor=motor,
                               sensorimotor=np.vstack([sensor, motor]))
