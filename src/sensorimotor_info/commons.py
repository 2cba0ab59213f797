"""
Configuration, selectors, errors and verbosity for the sensorimotor_info module.
"""

import logging
import math
import os
from enum import IntEnum
from typing import Type, TypeVar, Union

# Default parameters
k_default = 6
nof_bins_default = 10
log_base_default = math.e

_logger = logging.getLogger("sensorimotor_info")
_handler = None

_verbosity_levels = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


class SensorimotorError(Exception):
    """Base class of the errors raised by this package."""


class DimensionMismatch(SensorimotorError, ValueError):
    """Two Points compared with each other do not have the same length."""


class InsufficientSamples(SensorimotorError, ValueError):
    """Not enough samples for the requested neighbour search."""


class UnsupportedConfiguration(SensorimotorError, ValueError):
    """Unknown approximation, metric or information type."""


class MIApproximation(IntEnum):
    """
    Approximations for mutual information.

    Only K_NEAREST_NEIGHBOUR (Kraskov, Stogbauer, Grassberger 2004) is implemented,
    the other ones are placeholders for later extensions.
    """
    K_NEAREST_NEIGHBOUR = 0
    DENSITY_RATIO = 1           # Suzuki et al. (2009)
    ADAPTIVE_BINNING = 2
    KERNEL_DENSITY_ESTIMATION = 3
    EDGEWORTH_EXPANSION = 4


class DistanceMetric(IntEnum):
    EUCLIDEAN = 0
    DOT_PRODUCT = 1


class InfoType(IntEnum):
    """Information metrics computed from a sensorimotor path."""
    EMPOWERMENT = 0                         # Klyubin
    INFORMATION_TO_GO = 1
    LOOKAHEAD_RELEVANT_INFORMATION = 2      # Polani
    FREE_ENERGY = 3                         # Friston
    SENSORIMOTOR_ENTROPY = 4
    EXCESS_ENTROPY = 5


_aliases = {
    MIApproximation: {'knn': MIApproximation.K_NEAREST_NEIGHBOUR,
                      'ksg': MIApproximation.K_NEAREST_NEIGHBOUR},
    DistanceMetric: {'l2': DistanceMetric.EUCLIDEAN,
                     'dot': DistanceMetric.DOT_PRODUCT},
    InfoType: {'entropy': InfoType.SENSORIMOTOR_ENTROPY},
}

E = TypeVar('E', bound=IntEnum)


def choose(enum_type: Type[E], value: Union[E, int, str]) -> E:
    """
    Convert a selector given as enum member, integer or name into an enum member.

    Parameters
    ----------
    enum_type : Type[IntEnum]
        MIApproximation, DistanceMetric or InfoType
    value : enum member, int or str
        e.g. MIApproximation.K_NEAREST_NEIGHBOUR, 0, "k_nearest_neighbour" or "knn"

    Returns
    -------
    IntEnum
        The matching member

    Raises
    ------
    UnsupportedConfiguration
        If the value does not name a member of enum_type
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        key = value.strip().lower().replace('-', '_').replace(' ', '_')
        if key in _aliases.get(enum_type, {}):
            return _aliases[enum_type][key]
        try:
            return enum_type[key.upper()]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_type(value)
        except ValueError:
            pass
    raise UnsupportedConfiguration(f"unknown {enum_type.__name__}: {value!r}")


def set_verbosity(level: int = 1) -> None:
    """
    Set the verbosity level of the library.

    Parameters
    ----------
    level : int
        Verbosity level (0=errors only, 1=warnings, 2=info, 3+=debug)
    """
    global _handler

    if level < 0:
        raise ValueError("verbosity level must be >= 0")
    _logger.setLevel(_verbosity_levels[min(level, 3)])
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter("%(levelname)-8s | %(name)s | %(message)s"))
        _logger.addHandler(_handler)


def get_verbosity() -> int:
    """Get the current verbosity level."""
    level = _logger.getEffectiveLevel()
    for verbosity, log_level in sorted(_verbosity_levels.items(), reverse=True):
        if level <= log_level:
            return verbosity
    return 0


if 'SENSORIMOTOR_INFO_VERBOSITY' in os.environ:
    set_verbosity(int(os.environ['SENSORIMOTOR_INFO_VERBOSITY']))
