"""
Data processing utilities for sensorimotor paths.
"""

import numpy as np
from time import time
from typing import Sequence, Union

from .core import MutualInformation
from .structs import SensorimotorPath


def save_path(path: SensorimotorPath, fname: str) -> None:
    """
    Write a path as a text table: one line per time step, the action components
    followed by the observation components.

    Parameters
    ----------
    path : SensorimotorPath
        Trajectory to save
    fname : str
        Output file name
    """
    observations, actions = path.to_arrays()
    np.savetxt(fname, np.vstack([actions, observations]).T, fmt='%.17g')


def load_path(fname: str, action_dim: int = 1, observation_dim: int = 1,
              t0: int = 1) -> SensorimotorPath:
    """
    Read a path written by save_path (or by any tool using the same columns).

    Parameters
    ----------
    fname : str
        Input file name
    action_dim, observation_dim : int
        Number of action and observation columns
    t0 : int
        Timestamp of the first line

    Returns
    -------
    SensorimotorPath
    """
    table = np.loadtxt(fname, dtype=np.float64, ndmin=2)
    if table.shape[1] != action_dim + observation_dim:
        raise ValueError(f"{fname} has {table.shape[1]} columns, expected "
                         f"{action_dim} + {observation_dim}")
    actions = table[:, :action_dim].T
    observations = table[:, action_dim:].T
    return SensorimotorPath.from_arrays(observations, actions, t0=t0)


def normalize(path: SensorimotorPath) -> SensorimotorPath:
    """
    Rescale each observation and action dimension into [0, 1] (min-max).

    Constant dimensions are mapped to 0. Timestamps are kept.
    """
    new = SensorimotorPath()
    if len(path) == 0:
        return new
    observations, actions = path.to_arrays()

    def rescale(x):
        lo = x.min(axis=1, keepdims=True)
        span = x.max(axis=1, keepdims=True) - lo
        span[span == 0] = 1.0
        return np.clip((x - lo) / span, 0.0, 1.0)

    for pair, x, y in zip(path, rescale(observations).T, rescale(actions).T):
        new.append(x, y, pair.t)
    return new


def uniform_path(n_pts: int, rng: np.random.Generator,
                 observation_dim: int = 1, action_dim: int = 1) -> SensorimotorPath:
    """Independent uniform observations and actions in [0, 1[."""
    observations = rng.random((observation_dim, n_pts))
    actions = rng.random((action_dim, n_pts))
    return SensorimotorPath.from_arrays(observations, actions)


def gaussian_path(n_pts: int, r: float, rng: np.random.Generator) -> SensorimotorPath:
    """
    Bivariate normal observation and action with unit variances and correlation r.

    The mutual information is given by gaussian_MI(r).
    """
    if not -1.0 < r < 1.0:
        raise ValueError("correlation must be in ]-1, 1[")
    cov = np.array([[1.0, r], [r, 1.0]])
    z = rng.multivariate_normal(np.zeros(2), cov, size=n_pts)
    return SensorimotorPath.from_arrays(z[:, 0], z[:, 1])


def sinus_path(n_pts: int, period: float = 100.0) -> SensorimotorPath:
    """Identical observation and action sin(t/period), t = 1..n_pts."""
    t = np.arange(1, n_pts + 1)
    x = np.sin(t / period)
    return SensorimotorPath.from_arrays(x, x.copy())


def gaussian_MI(r: float) -> float:
    """Mutual information -0.5*ln(1-r^2) (nats) of a bivariate normal with correlation r."""
    return float(-0.5 * np.log(1.0 - r * r))


def compute_over_k(path: SensorimotorPath, k_set: Union[Sequence[int], np.ndarray],
                   verbosity_timing: int = 0, **kwargs) -> np.ndarray:
    """
    Run the mutual information estimation for a range of k.

    Parameters
    ----------
    path : SensorimotorPath
        Trajectory
    k_set : sequence of int
        Numbers of neighbours
    verbosity_timing : int
        0 for no output, 1-2 for progress dots/details
    **kwargs
        Other arguments of MutualInformation (approximation, metric)

    Returns
    -------
    np.ndarray
        MI estimates, one per k

    Example
    -------
    >>> k_set = np.arange(1, 21)
    >>> MI = compute_over_k(path, k_set)
    """
    res = np.zeros(len(k_set), dtype=float)
    mi = MutualInformation(**kwargs)

    for i, k in enumerate(k_set):
        if verbosity_timing > 1:
            print(f"{i+1} / {len(k_set)} k = {k}", end='')
        elif verbosity_timing > 0:
            print(".", end='', flush=True)

        time1 = time()
        mi.k = int(k)
        res[i] = mi.calculate(path)
        time2 = time()
        if verbosity_timing > 1:
            print(f" -> {res[i]}\t elapsed time: {time2-time1:.3f}")

    if verbosity_timing == 1:
        print()

    return res
