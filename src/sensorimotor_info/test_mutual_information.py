"""
Test script for the mutual information estimator of sensorimotor_info.
"""
import numpy as np
import pytest
from scipy.special import digamma as scipy_digamma

from sensorimotor_info import (
    digamma,
    euclidean,
    dot_product,
    distance,
    max_norm,
    rank_neighbours,
    nearest_distance,
    get_nearest_distance,
    get_neighbour_count,
    MutualInformation,
    MIApproximation,
    DistanceMetric,
    SensationActionPair,
    SensorimotorPath,
    DimensionMismatch,
    InsufficientSamples,
    UnsupportedConfiguration,
    compute_MI,
    uniform_path,
    gaussian_path,
    sinus_path,
    gaussian_MI,
    set_verbosity,
    get_verbosity,
)


def _line_path(values):
    """Path with identical 1-d observation and action equal to values."""
    values = np.asarray(values, dtype=float)
    return SensorimotorPath.from_arrays(values, values.copy())


def test_digamma():
    """Test the digamma approximation against scipy."""
    print("Testing digamma...")

    assert abs(digamma(1.0) - (-0.5772156649)) < 1e-8
    x = np.array([0.1, 0.5, 1.0, 2.5, 5.99, 6.0, 10.0, 123.4, 2000.0])
    np.testing.assert_allclose(digamma(x), scipy_digamma(x), rtol=0, atol=1e-7)

    # integers, as used by the estimator
    n = np.arange(1, 50)
    np.testing.assert_allclose(digamma(n), scipy_digamma(n), rtol=0, atol=1e-7)
    assert digamma(n).shape == n.shape
    assert isinstance(digamma(3), float)

    with pytest.raises(ValueError):
        digamma(0.0)

    print("  PASSED\n")


def test_distances():
    """Test the distance metrics."""
    print("Testing distances...")
    rng = np.random.default_rng(1)

    assert euclidean([0.0, 0.0], [3.0, 4.0]) == 5.0
    for _ in range(10):
        a, b = rng.normal(size=3), rng.normal(size=3)
        assert euclidean(a, b) == euclidean(b, a)

    assert dot_product([1, 2, 3], [4, 5, 6]) == 32.0
    assert distance([1, 2, 3], [4, 5, 6], DistanceMetric.DOT_PRODUCT) == 32.0
    assert distance([1, 2, 3], [4, 5, 6], "dot") == 32.0
    assert distance([0, 0], [3, 4]) == 5.0

    with pytest.raises(DimensionMismatch):
        euclidean([0.0, 1.0], [0.0, 1.0, 2.0])
    with pytest.raises(DimensionMismatch):
        dot_product([0.0], [0.0, 1.0])
    with pytest.raises(UnsupportedConfiguration):
        distance([0.0], [1.0], "manhattan")
    with pytest.raises(UnsupportedConfiguration):
        distance([0.0], [1.0], 7)

    print("  PASSED\n")


def test_max_norm():
    """Test the maximum norm on the joint space."""
    print("Testing maximum norm...")

    p = SensationActionPair([0.0], [0.0], 1)
    q = SensationActionPair([0.5], [0.8], 2)
    assert max_norm(p, q) == 0.8
    assert max_norm(q, p) == 0.8
    # a sample is never its own neighbour
    assert max_norm(p, p) == np.inf
    assert max_norm(p, SensationActionPair([0.5], [0.8], 1)) == np.inf

    print("  PASSED\n")


def test_nearest_distance():
    """Test the k-th nearest neighbour search."""
    print("Testing nearest neighbour search...")

    path = _line_path([0.0, 1.0, 3.0, 6.0, 10.0])
    container = path.snapshot()
    query = container[0]

    assert get_nearest_distance(container, query, k=1) == 1.0
    assert get_nearest_distance(container, query, k=2) == 3.0
    assert get_nearest_distance(container, query, k=3) == 6.0
    assert get_nearest_distance(path, path[2], k=1) == 2.0

    small = _line_path([0.0, 1.0]).snapshot()
    with pytest.raises(InsufficientSamples):
        get_nearest_distance(small, small[0], k=3)
    with pytest.raises(ValueError):
        get_nearest_distance(container, query, k=0)

    # nearest point of a plain set of points
    V = np.array([[0.0, 0.0], [3.0, 4.0], [1.0, 1.0]])
    assert nearest_distance(V, [3.0, 5.0]) == 1.0
    with pytest.raises(InsufficientSamples):
        nearest_distance(np.zeros((0, 2)), [0.0, 0.0])

    print("  PASSED\n")


def test_ranking_ties():
    """Ties in the ranking are broken by position in the path."""
    print("Testing tie-breaking of the neighbour ranking...")

    path = _line_path([0.0, 1.0, -1.0, 1.0, 2.0])
    container = path.snapshot()
    order, dist = rank_neighbours(container, container[0])

    assert list(order) == [1, 2, 3, 4, 0]
    np.testing.assert_array_equal(dist, [1.0, 1.0, 1.0, 2.0, np.inf])

    order2, _ = rank_neighbours(container, container[0])
    np.testing.assert_array_equal(order, order2)

    print("  PASSED\n")


def test_neighbour_count():
    """Test the marginal neighbour counts."""
    print("Testing neighbour count...")

    obs = [0.0, 0.5, -0.5, 0.0, 2.0]
    act = [0.0, 3.0, 0.2, 0.1, 0.3]
    path = SensorimotorPath.from_arrays(obs, act)
    container = path.snapshot()

    # the duplicate observation at distance 0 is not counted
    n_x, n_y = get_neighbour_count(container, container[0], 1.0)
    assert (n_x, n_y) == (2, 3)

    # strictly less than the distance
    n_x, n_y = get_neighbour_count(container, container[0], 0.5)
    assert (n_x, n_y) == (0, 3)

    # a sample with the timestamp of the query is never counted
    query = SensationActionPair([0.1], [0.05], 1)
    n_x, n_y = get_neighbour_count(container, query, 1.0)
    assert n_x == 3
    assert n_y == 3

    print("  PASSED\n")


def test_configuration():
    """Test the estimator configuration and errors."""
    print("Testing estimator configuration...")

    mi = MutualInformation()
    assert mi.k == 6
    assert mi.approximation == MIApproximation.K_NEAREST_NEIGHBOUR
    assert MutualInformation(approximation="knn").approximation == MIApproximation.K_NEAREST_NEIGHBOUR
    assert MutualInformation(approximation=0).approximation == MIApproximation.K_NEAREST_NEIGHBOUR

    with pytest.raises(UnsupportedConfiguration):
        MutualInformation(approximation="foo")
    with pytest.raises(UnsupportedConfiguration):
        MutualInformation(approximation=99)
    with pytest.raises(ValueError):
        MutualInformation(k=0)

    path = uniform_path(50, np.random.default_rng(0))
    with pytest.raises(NotImplementedError):
        MutualInformation(approximation=MIApproximation.DENSITY_RATIO).calculate(path)
    with pytest.raises(NotImplementedError):
        MutualInformation(approximation="kernel_density_estimation").calculate(path)

    # path.length <= k
    with pytest.raises(InsufficientSamples):
        MutualInformation(k=6).calculate(uniform_path(6, np.random.default_rng(0)))
    MutualInformation(k=6).calculate(uniform_path(7, np.random.default_rng(0)))

    print("  PASSED\n")


def test_mi_independent():
    """Test MI on independent uniform data (should be ~0)."""
    print("Testing MI on independent data...")

    for seed in range(5):
        path = uniform_path(500, np.random.default_rng(seed))
        I = MutualInformation(k=6).calculate(path)
        print(f"  seed {seed}: MI (independent) = {I:.4f} (should be ~0)")
        assert abs(I) < 0.3, f"MI of independent variables should be ~0: {I}"

    print("  PASSED\n")


def test_mi_correlation_order():
    """A strongly correlated path has more MI than a weakly correlated one."""
    print("Testing MI ordering with correlation...")
    rng = np.random.default_rng(10)
    mi = MutualInformation(k=6)

    n_trials = 5
    wins = 0
    for _ in range(n_trials):
        I1 = mi.calculate(gaussian_path(1000, 0.1, rng))
        I2 = mi.calculate(gaussian_path(1000, 0.9, rng))
        print(f"  MI(r=0.1) = {I1:.4f}, MI(r=0.9) = {I2:.4f}")
        wins += I2 > I1
    assert wins > n_trials // 2

    print("  PASSED\n")


def test_mi_gaussian_theory():
    """Test MI on correlated Gaussian data against the analytic value."""
    print("Testing MI on correlated data...")
    rng = np.random.default_rng(42)

    r = 0.9
    path = gaussian_path(2000, r, rng)
    I = MutualInformation(k=20).calculate(path)

    I_theory = gaussian_MI(r)
    print(f"  MI (correlated) = {I:.4f}, Theory = {I_theory:.4f}")
    assert abs(I - I_theory) < 0.2, "MI estimate differs from theory"

    print("  PASSED\n")


def test_mi_sinus():
    """Identical observation and action: large MI."""
    print("Testing MI on identical signals...")

    I = MutualInformation().calculate(sinus_path(500))
    print(f"  MI (sinus) = {I:.4f}")
    assert I > 2.0

    print("  PASSED\n")


def test_mi_multidimensional():
    """Test MI with 2-d observations and 2-d actions."""
    print("Testing MI on multidimensional data...")
    rng = np.random.default_rng(3)

    n_pts = 1000
    a = rng.normal(size=n_pts)
    obs = np.vstack([a, rng.normal(size=n_pts)])
    act = np.vstack([a + 0.1 * rng.normal(size=n_pts), rng.normal(size=n_pts)])

    I = compute_MI(obs, act, k=6)
    print(f"  MI (2-d) = {I:.4f}")
    assert I > 0.5

    print("  PASSED\n")


def test_mi_deterministic():
    """Repeated calls on the same path give identical results."""
    print("Testing reproducibility...")

    path = gaussian_path(300, 0.5, np.random.default_rng(7))
    mi = MutualInformation(k=4)
    I1 = mi.calculate(path)
    I2 = mi.calculate(path)
    I3 = MutualInformation(k=4).calculate(path)
    assert I1 == I2 == I3

    x, y = path.to_arrays()
    assert compute_MI(x, y, k=4) == I1
    # the path is left untouched
    x2, y2 = path.to_arrays()
    np.testing.assert_array_equal(x, x2)
    np.testing.assert_array_equal(y, y2)

    print("  PASSED\n")


def test_duplicates():
    """Samples at distance 0 are not an error."""
    print("Testing duplicate samples...")

    values = [0.0] * 8 + [1.0, 2.0, 3.0, 4.0]
    path = _line_path(values)
    with pytest.warns(RuntimeWarning):
        I = MutualInformation(k=2).calculate(path)
    assert np.isfinite(I)

    print("  PASSED\n")


def test_verbosity():
    """Test the verbosity setting."""
    print("Testing verbosity...")

    level = get_verbosity()
    try:
        set_verbosity(3)
        assert get_verbosity() == 3
        MutualInformation().calculate(uniform_path(20, np.random.default_rng(0)))
        set_verbosity(0)
        assert get_verbosity() == 0
    finally:
        set_verbosity(level)

    print("  PASSED\n")


if __name__ == "__main__":
    print("=" * 60)
    print("Testing sensorimotor_info mutual information")
    print("=" * 60 + "\n")

    test_digamma()
    test_distances()
    test_max_norm()
    test_nearest_distance()
    test_ranking_ties()
    test_neighbour_count()
    test_configuration()
    test_mi_independent()
    test_mi_correlation_order()
    test_mi_gaussian_theory()
    test_mi_sinus()
    test_mi_multidimensional()
    test_mi_deterministic()
    test_duplicates()
    test_verbosity()

    print("=" * 60)
    print("All tests PASSED!")
    print("=" * 60)
