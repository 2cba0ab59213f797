"""
Core mutual information computation using the k-NN algorithm.

This module implements:
- the digamma function (asymptotic expansion)
- the k-th nearest neighbour search in the joint observation-action space
- the marginal neighbour counts
- Mutual Information (Kraskov-Stogbauer-Grassberger algorithm 1)

References:
- Kraskov, A., Stogbauer, H., Grassberger, P. (2004) PRE 69, 066138
- Bernardo, J.M. (1976) Algorithm AS 103: Psi (digamma) function
"""

import logging
import warnings
import numpy as np
from typing import Tuple, Union

from . import commons
from .commons import (DistanceMetric, InsufficientSamples, MIApproximation,
                      choose)
from .distances import distances_to, max_norm_to
from .structs import (Point, RandomVariable, SensationActionPair,
                      SensorimotorContainer, SensorimotorPath)

logger = logging.getLogger(__name__)

_DIGAMMA_THRESHOLD = 6.0


def digamma(x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Digamma function psi(x) for x > 0.

    The argument is shifted upwards with psi(x) = psi(x+1) - 1/x until it is
    larger than 6, where the asymptotic expansion

    psi(x) = ln(x) - 1/(2x) - 1/(12x^2) + 1/(120x^4) - 1/(252x^6) + O(1/x^8)

    is accurate to better than 1e-8.

    Parameters
    ----------
    x : float or np.ndarray
        Strictly positive argument(s)

    Returns
    -------
    float or np.ndarray
        psi(x), with the same shape as x
    """
    x = np.asarray(x, dtype=np.float64)
    scalar = (x.ndim == 0)
    x = np.atleast_1d(x).copy()
    if not np.all(x > 0):
        raise ValueError("digamma is only defined here for x > 0")

    result = np.zeros_like(x)
    small = x < _DIGAMMA_THRESHOLD
    while np.any(small):
        result[small] -= 1.0 / x[small]
        x[small] += 1.0
        small = x < _DIGAMMA_THRESHOLD

    inv2 = 1.0 / (x * x)
    result += (np.log(x) - 0.5 / x
               - inv2 * (1.0 / 12 - inv2 * (1.0 / 120 - inv2 / 252)))

    if scalar:
        return float(result[0])
    return result


def _as_container(data: Union[SensorimotorPath, SensorimotorContainer]) -> SensorimotorContainer:
    if isinstance(data, SensorimotorContainer):
        return data
    return SensorimotorContainer.from_path(data)


def nearest_distance(V: RandomVariable, p: Point) -> float:
    """
    Euclidean distance from p to the nearest point of the set V.

    This returns e.g. epsilon_x if V == X.
    """
    V = np.asarray(V, dtype=np.float64)
    if V.size == 0:
        raise InsufficientSamples("the set of points is empty")
    return float(np.min(distances_to(V, p, DistanceMetric.EUCLIDEAN)))


def rank_neighbours(container: Union[SensorimotorPath, SensorimotorContainer],
                    query: SensationActionPair,
                    metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN
                    ) -> Tuple[np.ndarray, np.ndarray]:
    """
    Order the samples by ascending maximum-norm distance to the query.

    Ties are broken by position in the path (stable sort), so the ranking is
    reproducible. The query sample itself is at +inf and comes last.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (positions in ranking order, distances in ranking order)
    """
    container = _as_container(container)
    dist = max_norm_to(container, query, metric)
    order = np.argsort(dist, kind='stable')
    return order, dist[order]


def get_nearest_distance(container: Union[SensorimotorPath, SensorimotorContainer],
                         query: SensationActionPair, k: int = 1,
                         metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN
                         ) -> float:
    """
    Distance to the k-th nearest neighbour in the joint space.

    The maximum of the observation distance and the action distance is used as
    distance measure, so for a query at [0, 0] and a neighbour at [0.5, 0.8] the
    distance is 0.8.

    Parameters
    ----------
    container : SensorimotorContainer or SensorimotorPath
        Candidate samples
    query : SensationActionPair
        Sample to find neighbours of, never counted as its own neighbour
    k : int
        Rank of the neighbour (1 is the nearest one)
    metric : DistanceMetric
        Distance used in each subspace

    Returns
    -------
    float
        The k-th nearest distance
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    container = _as_container(container)
    if len(container) <= k - 1:
        raise InsufficientSamples(f"{len(container)} candidates for k={k} neighbours")

    if k == 1:
        return float(np.min(max_norm_to(container, query, metric)))
    _, dist = rank_neighbours(container, query, metric)
    return float(dist[k - 1])


def get_neighbour_count(container: Union[SensorimotorPath, SensorimotorContainer],
                        query: SensationActionPair, dist: float,
                        metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN
                        ) -> Tuple[int, int]:
    """
    Count the neighbours of the query that are strictly closer than dist.

    With a query at [0, 0] and dist = 0.8, every sample with an observation in
    ]-0.8, 0.8[ is counted in n_x and every sample with an action in ]-0.8, 0.8[
    in n_y. The query itself and samples at distance 0 are not counted.

    Returns
    -------
    Tuple[int, int]
        (n_x, n_y)
    """
    container = _as_container(container)
    others = container.times != query.t
    d_x = distances_to(container.observations, query.observation, metric)
    d_y = distances_to(container.actions, query.action, metric)
    n_x = np.count_nonzero((d_x < dist) & (d_x != 0) & others)
    n_y = np.count_nonzero((d_y < dist) & (d_y != 0) & others)
    return int(n_x), int(n_y)


class MutualInformation:
    """
    Mutual information between the observations and the actions of a path.

    Parameters
    ----------
    approximation : MIApproximation
        Only K_NEAREST_NEIGHBOUR is implemented
    k : int
        Number of neighbours (default=6)
    metric : DistanceMetric
        Distance within the observation and action subspaces (default=EUCLIDEAN)

    Example
    -------
    >>> mi = MutualInformation(k=6)
    >>> I = mi.calculate(path)
    """

    def __init__(self, approximation: Union[MIApproximation, int, str] = MIApproximation.K_NEAREST_NEIGHBOUR,
                 k: int = commons.k_default,
                 metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN):
        self.approximation = approximation
        self.k = k
        self.metric = metric

    @property
    def approximation(self) -> MIApproximation:
        return self._approximation

    @approximation.setter
    def approximation(self, value):
        self._approximation = choose(MIApproximation, value)

    @property
    def k(self) -> int:
        return self._k

    @k.setter
    def k(self, value: int):
        if int(value) != value or value < 1:
            raise ValueError(f"k must be a positive integer, got {value}")
        self._k = int(value)

    @property
    def metric(self) -> DistanceMetric:
        return self._metric

    @metric.setter
    def metric(self, value):
        self._metric = choose(DistanceMetric, value)

    def __repr__(self) -> str:
        return f"MutualInformation(approximation={self.approximation.name}, k={self.k})"

    def calculate(self, path: SensorimotorPath) -> float:
        """
        Estimate the mutual information between observations and actions.

        Parameters
        ----------
        path : SensorimotorPath
            Trajectory, read but never modified

        Returns
        -------
        float
            MI estimate in nats. It can be slightly negative for small or weakly
            dependent samples (bias of the estimator).
        """
        if self.approximation == MIApproximation.K_NEAREST_NEIGHBOUR:
            return self._knn_approximation(path, self.k)
        raise NotImplementedError(f"{self.approximation.name} approximation is not implemented")

    def _knn_approximation(self, path: SensorimotorPath, k: int) -> float:
        # I(X,Y) = psi(k) - 1/N sum_i [psi(n_x+1) + psi(n_y+1)] + psi(N)
        #
        # For highly correlated variables the samples of Z=(X,Y) lie close to a line,
        # and the k neighbours in the joint space are found along that line, so the
        # marginal counts stay small compared to N.
        n_pts = len(path)
        if n_pts <= k:
            raise InsufficientSamples(f"not enough points ({n_pts}) for k={k} neighbours")

        container = _as_container(path)
        n_x = np.zeros(n_pts, dtype=np.int64)
        n_y = np.zeros(n_pts, dtype=np.int64)
        n_duplicates = 0

        for i in range(n_pts):
            query = container[i]
            dist = get_nearest_distance(container, query, k, self.metric)
            if dist == 0:
                n_duplicates += 1
            n_x[i], n_y[i] = get_neighbour_count(container, query, dist, self.metric)

        if n_duplicates > 0:
            warnings.warn(f"{n_duplicates} samples have their {k}-th neighbour at distance 0",
                          RuntimeWarning)

        digamma_nx_ny = float(np.mean(digamma(n_x + 1) + digamma(n_y + 1)))
        digamma_k = digamma(k)
        digamma_N = digamma(n_pts)

        logger.debug("psi(k) - <psi(nx+1)+psi(ny+1)> + psi(N) = %.6f - %.6f + %.6f",
                     digamma_k, digamma_nx_ny, digamma_N)
        return digamma_k - digamma_nx_ny + digamma_N


def compute_MI(x: np.ndarray, y: np.ndarray, k: int = commons.k_default,
               metric: Union[DistanceMetric, int, str] = DistanceMetric.EUCLIDEAN) -> float:
    """
    Compute Mutual Information MI(x, y) with the k-NN estimator.

    Parameters
    ----------
    x : np.ndarray
        Observations, shape (n_dims_x, n_pts) or (n_pts,)
    y : np.ndarray
        Actions, shape (n_dims_y, n_pts) or (n_pts,)
    k : int
        Number of neighbours

    Returns
    -------
    float
        MI estimate in nats
    """
    path = SensorimotorPath.from_arrays(x, y)
    return MutualInformation(k=k, metric=metric).calculate(path)
