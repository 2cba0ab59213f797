"""
Data structures for sensorimotor trajectories.

A random variable is in most papers just a scalar. Here it is a vector: a sensor
input or motor output is most naturally represented by multiple values. A Point is
one such vector (a 1-d array of floats), and a RandomVariable is a set of Points
(a 2-d array with one Point per row).
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .commons import DimensionMismatch

Point = np.ndarray
RandomVariable = np.ndarray


def as_point(p: Union[Sequence[float], np.ndarray]) -> Point:
    """
    Convert a sequence of numbers into a Point.

    Parameters
    ----------
    p : sequence of float or np.ndarray
        Values, a scalar is promoted to a Point of length 1

    Returns
    -------
    np.ndarray
        1-d float64 array
    """
    x = np.asarray(p, dtype=np.float64)
    if x.ndim == 0:
        x = x.reshape(1)
    if x.ndim != 1:
        raise ValueError(f"a Point must be 1-dimensional, got shape {x.shape}")
    return x


@dataclass(frozen=True, eq=False)
class SensationActionPair:
    """An observation-action pair at time t."""
    observation: Point
    action: Point
    t: int

    def __post_init__(self):
        object.__setattr__(self, 'observation', as_point(self.observation))
        object.__setattr__(self, 'action', as_point(self.action))
        object.__setattr__(self, 't', int(self.t))


class SensorimotorPath:
    """
    Temporally ordered sequence of SensationActionPair.

    Insertion order is temporal order: timestamps must be strictly increasing.
    """

    def __init__(self, pairs: Optional[Sequence[SensationActionPair]] = None):
        self._pairs: List[SensationActionPair] = []
        for pair in pairs or ():
            self.add(pair)

    def add(self, pair: SensationActionPair) -> None:
        """Append an existing pair, checking time order and dimensions."""
        if self._pairs:
            last = self._pairs[-1]
            if pair.t <= last.t:
                raise ValueError(f"timestamp {pair.t} is not after previous timestamp {last.t}")
            if pair.observation.size != last.observation.size:
                raise DimensionMismatch(f"observation of size {pair.observation.size}, "
                                        f"expected {last.observation.size}")
            if pair.action.size != last.action.size:
                raise DimensionMismatch(f"action of size {pair.action.size}, "
                                        f"expected {last.action.size}")
        self._pairs.append(pair)

    def append(self, observation, action, t: Optional[int] = None) -> SensationActionPair:
        """
        Append a new sample.

        Parameters
        ----------
        observation, action : sequence of float
            Sensor and actuator values
        t : int, optional
            Timestamp. Defaults to the previous timestamp + 1 (or 1 for the first sample).

        Returns
        -------
        SensationActionPair
            The pair that was stored
        """
        if t is None:
            t = self._pairs[-1].t + 1 if self._pairs else 1
        pair = SensationActionPair(observation, action, t)
        self.add(pair)
        return pair

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[SensationActionPair]:
        return iter(self._pairs)

    def __getitem__(self, index: int) -> SensationActionPair:
        return self._pairs[index]

    def __repr__(self) -> str:
        return f"SensorimotorPath(length={len(self)})"

    @property
    def observation_dim(self) -> int:
        return self._pairs[0].observation.size if self._pairs else 0

    @property
    def action_dim(self) -> int:
        return self._pairs[0].action.size if self._pairs else 0

    def snapshot(self) -> 'SensorimotorContainer':
        """Random-access copy of the current samples."""
        return SensorimotorContainer.from_path(self)

    @classmethod
    def from_arrays(cls, observations: np.ndarray, actions: np.ndarray,
                    t0: int = 1) -> 'SensorimotorPath':
        """
        Build a path from observation and action signals.

        Parameters
        ----------
        observations : np.ndarray
            Signal of shape (n_dims_x, n_pts) or (n_pts,)
        actions : np.ndarray
            Signal of shape (n_dims_y, n_pts) or (n_pts,)
        t0 : int
            Timestamp of the first sample, the following ones are t0+1, t0+2, ...

        Returns
        -------
        SensorimotorPath
        """
        x = np.asarray(observations, dtype=np.float64)
        y = np.asarray(actions, dtype=np.float64)
        if x.ndim == 1:
            x = x.reshape(1, -1)
        if y.ndim == 1:
            y = y.reshape(1, -1)
        if x.ndim != 2 or y.ndim != 2:
            raise ValueError("observations and actions must be 1-d or 2-d arrays")
        if x.shape[1] != y.shape[1]:
            raise ValueError("observations and actions must have same number of points")

        path = cls()
        for i in range(x.shape[1]):
            path.add(SensationActionPair(x[:, i].copy(), y[:, i].copy(), t0 + i))
        return path

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            (observations, actions), of shapes (n_dims_x, n_pts) and (n_dims_y, n_pts)
        """
        container = self.snapshot()
        return container.observations.T.copy(), container.actions.T.copy()


@dataclass(frozen=True, eq=False)
class SensorimotorContainer:
    """
    Random-access snapshot of a SensorimotorPath.

    The arrays are copies: the snapshot does not depend on the path it was built
    from, and a sample is identified by its stable position in these arrays.
    """
    observations: np.ndarray
    actions: np.ndarray
    times: np.ndarray = field(repr=False)

    @classmethod
    def from_path(cls, path: SensorimotorPath) -> 'SensorimotorContainer':
        n_pts = len(path)
        observations = np.empty((n_pts, path.observation_dim), dtype=np.float64)
        actions = np.empty((n_pts, path.action_dim), dtype=np.float64)
        times = np.empty(n_pts, dtype=np.int64)
        for i, pair in enumerate(path):
            observations[i] = pair.observation
            actions[i] = pair.action
            times[i] = pair.t
        for a in (observations, actions, times):
            a.setflags(write=False)
        return cls(observations, actions, times)

    def __len__(self) -> int:
        return self.times.size

    def __getitem__(self, index: int) -> SensationActionPair:
        return SensationActionPair(self.observations[index], self.actions[index], self.times[index])
