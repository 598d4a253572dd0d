"""The floating point type shared by coordinates and projections."""

import math
from typing import Final, TypeAlias

from osmjson._env import FLOAT_BITS

import numpy as np


__docformat__ = "google"
__all__ = (
    "FLOAT",
    "Float",
    "INF",
    "NEG_INF",
    "FLOAT_MAX",
)


Float: TypeAlias = float | np.float32
"""Any value of the configured float type."""

FLOAT: Final[type] = float if FLOAT_BITS == 64 else np.float32
"""Either Python's ``float`` (double precision) or ``numpy.float32``."""

INF: Final = FLOAT(math.inf)
NEG_INF: Final = FLOAT(-math.inf)

FLOAT_MAX: Final[float] = float(np.finfo(FLOAT).max)
"""The largest finite magnitude of ``FLOAT``."""
