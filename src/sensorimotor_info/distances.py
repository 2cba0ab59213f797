"""
Distance functions between Points and between observation-action samples.

Two families are provided: scalar functions comparing two Points, and vectorised
versions comparing one Point with every row of a RandomVariable (used by the
neighbour searches in core.py).
"""

import numpy as np
from typing import Union

from .commons import DimensionMismatch, DistanceMetric, choose
from .structs import Point, RandomVariable, SensationActionPair, SensorimotorContainer, as_point


def _check_dims(p0: np.ndarray, p1: np.ndarray) -> None:
    if p0.shape[-1] != p1.shape[-1]:
        raise DimensionMismatch(f"points do not have the same dimension "
                                f"({p0.shape[-1]} and {p1.shape[-1]})")


def euclidean(p0: Point, p1: Point) -> float:
    """
    Euclidean distance sqrt(sum_i (p0_i - p1_i)^2).

    Raises
    ------
    DimensionMismatch
        If p0 and p1 do not have the same length
    """
    p0, p1 = as_point(p0), as_point(p1)
    _check_dims(p0, p1)
    return float(np.sqrt(np.sum((p0 - p1) ** 2)))


def dot_product(p0: Point, p1: Point) -> float:
    """Inner product sum_i p0_i * p1_i."""
    p0, p1 = as_point(p0), as_point(p1)
    _check_dims(p0, p1)
    return float(np.dot(p0, p1))


def distance(p0: Point, p1: Point,
             metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN) -> float:
    """
    Distance between two Points (e.g. two sensor values) for the given metric.

    Parameters
    ----------
    p0, p1 : Point
        Points of equal length
    metric : DistanceMetric
        EUCLIDEAN or DOT_PRODUCT

    Returns
    -------
    float
        The distance
    """
    metric = choose(DistanceMetric, metric)
    if metric == DistanceMetric.DOT_PRODUCT:
        return dot_product(p0, p1)
    return euclidean(p0, p1)


def max_norm(x: SensationActionPair, y: SensationActionPair,
             metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN) -> float:
    """
    Maximum norm on the joint space Z=(X,Y).

    For a sample at [0, 0] and another one at [0.5, 0.8] (observation, action)
    the distance is 0.8. A sample compared with itself (same timestamp) is at
    infinite distance, so it is never its own neighbour.
    """
    if x.t == y.t:
        return np.inf
    d0 = distance(x.observation, y.observation, metric)
    d1 = distance(x.action, y.action, metric)
    return max(d0, d1)


def distances_to(V: RandomVariable, p: Point,
                 metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN) -> np.ndarray:
    """
    Distance from each row of V to the Point p.

    Parameters
    ----------
    V : np.ndarray
        RandomVariable of shape (n_pts, n_dims)
    p : Point
        Point of length n_dims

    Returns
    -------
    np.ndarray
        Distances, shape (n_pts,)
    """
    metric = choose(DistanceMetric, metric)
    V = np.asarray(V, dtype=np.float64)
    if V.ndim == 1:
        V = V.reshape(-1, 1)
    p = as_point(p)
    _check_dims(V, p)

    if metric == DistanceMetric.DOT_PRODUCT:
        return V @ p
    return np.sqrt(np.sum((V - p) ** 2, axis=1))


def max_norm_to(container: SensorimotorContainer, query: SensationActionPair,
                metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN) -> np.ndarray:
    """
    Maximum norm from each sample of the container to the query sample.

    The entry of the query sample itself (same timestamp) is +inf.

    Returns
    -------
    np.ndarray
        Distances, shape (n_pts,)
    """
    d0 = distances_to(container.observations, query.observation, metric)
    d1 = distances_to(container.actions, query.action, metric)
    dist = np.maximum(d0, d1)
    dist[container.times == query.t] = np.inf
    return dist
