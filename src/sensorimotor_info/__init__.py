# sensorimotor_info - Information theory on sensorimotor trajectories
# Based on the k-NN algorithm from Kraskov, Stogbauer, Grassberger (2004)
#
# This module estimates the mutual information between the observations and
# the actions of an agent, plus binned entropies, in pure Python (numpy/scipy).

import logging

from .commons import (
    k_default,
    nof_bins_default,
    SensorimotorError,
    DimensionMismatch,
    InsufficientSamples,
    UnsupportedConfiguration,
    MIApproximation,
    DistanceMetric,
    InfoType,
    choose,
    set_verbosity,
    get_verbosity,
)

from .structs import (
    as_point,
    SensationActionPair,
    SensorimotorPath,
    SensorimotorContainer,
)

from .distances import (
    euclidean,
    dot_product,
    distance,
    max_norm,
)

from .core import (
    digamma,
    nearest_distance,
    rank_neighbours,
    get_nearest_distance,
    get_neighbour_count,
    MutualInformation,
    compute_MI,
)

from .converter import (
    BinnedVariables,
    RandomVariableConverter,
)

from .information import (
    uncertainty,
    Information,
)

from .tools import (
    save_path,
    load_path,
    normalize,
    uniform_path,
    gaussian_path,
    sinus_path,
    gaussian_MI,
    compute_over_k,
)

from .masks import (
    no_NaN,
    mask_finite,
    retain_from_mask,
    clean,
)

from .others import (
    surrogate,
    surrogate_test,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    # Commons
    "k_default",
    "nof_bins_default",
    "SensorimotorError",
    "DimensionMismatch",
    "InsufficientSamples",
    "UnsupportedConfiguration",
    "MIApproximation",
    "DistanceMetric",
    "InfoType",
    "choose",
    "set_verbosity",
    "get_verbosity",
    # Data structures
    "as_point",
    "SensationActionPair",
    "SensorimotorPath",
    "SensorimotorContainer",
    # Distances
    "euclidean",
    "dot_product",
    "distance",
    "max_norm",
    # Core functions
    "digamma",
    "nearest_distance",
    "rank_neighbours",
    "get_nearest_distance",
    "get_neighbour_count",
    "MutualInformation",
    "compute_MI",
    # Binning and entropy
    "BinnedVariables",
    "RandomVariableConverter",
    "uncertainty",
    "Information",
    # Tools
    "save_path",
    "load_path",
    "normalize",
    "uniform_path",
    "gaussian_path",
    "sinus_path",
    "gaussian_MI",
    "compute_over_k",
    # Masks
    "no_NaN",
    "mask_finite",
    "retain_from_mask",
    "clean",
    # Others
    "surrogate",
    "surrogate_test",
]
