"""
Map projections between geographic and planar coordinates.

A projection converts a ``Coordinate`` in place. After ``forward()``, the ``lat`` field
holds the planar ``y`` value and the ``lon`` field holds the planar ``x`` value,
both in meters for the built-in Web Mercator projection.
"""

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Final, TypeAlias

from osmjson._float import FLOAT, Float

import numpy as np


if TYPE_CHECKING:
    from osmjson.model import Coordinate


__docformat__ = "google"
__all__ = (
    "Projection",
    "WebMercator",
    "CustomProjection",
    "ProjectionLike",
    "WEB_MERCATOR",
    "EARTH_RADIUS",
    "lat2y",
    "lon2x",
    "y2lat",
    "x2lon",
)


EARTH_RADIUS: Final = FLOAT(6_378_137.0)
"""Equatorial radius of the WGS 84 ellipsoid in meters, as used by EPSG:3857."""

_TWO: Final = FLOAT(2.0)
_HALF_PI: Final = FLOAT(math.pi / 2.0)
_QUARTER_PI: Final = FLOAT(math.pi / 4.0)


class Projection(ABC):
    """
    Base class for map projections.

    Both methods mutate the given coordinate. Implementations must not keep any
    state between calls, so that nodes can be converted in any order.
    """

    __slots__ = ()

    @abstractmethod
    def forward(self, coord: "Coordinate") -> None:
        """Convert a geographic coordinate to planar space."""
        raise NotImplementedError

    @abstractmethod
    def backward(self, coord: "Coordinate") -> None:
        """Convert a planar coordinate back to geographic space."""
        raise NotImplementedError


class WebMercator(Projection):
    """
    Spherical Mercator projection used by most web maps.

    Latitudes of exactly ±90° have no finite ``y``; the result is then infinite
    or very large, and callers should filter polar data beforehand.

    References:
        - https://wiki.openstreetmap.org/wiki/Web_Mercator
        - https://epsg.io/3857
    """

    __slots__ = ()

    def forward(self, coord: "Coordinate") -> None:
        coord.lat = lat2y(coord.lat)
        coord.lon = lon2x(coord.lon)

    def backward(self, coord: "Coordinate") -> None:
        coord.lat = y2lat(coord.lat)
        coord.lon = x2lon(coord.lon)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CustomProjection(Projection):
    """
    Projection backed by a function that mutates a coordinate in place.

    The same function is applied in both directions. If you need to revert
    the conversion, the function has to be its own inverse.

    Args:
        func: called with the coordinate to convert
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[["Coordinate"], None]) -> None:
        if not callable(func):
            msg = f"expected a callable, got {type(func).__name__}"
            raise TypeError(msg)
        self._func = func

    @property
    def func(self) -> Callable[["Coordinate"], None]:
        """The wrapped function."""
        return self._func

    def forward(self, coord: "Coordinate") -> None:
        self._func(coord)

    def backward(self, coord: "Coordinate") -> None:
        self._func(coord)

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return f"{type(self).__name__}({name})"


ProjectionLike: TypeAlias = Projection | Callable[["Coordinate"], None]
"""A projection, or a function that is wrapped as ``CustomProjection``."""

WEB_MERCATOR: Final[WebMercator] = WebMercator()
"""Default projection."""


def _projection(p: ProjectionLike) -> Projection:
    if isinstance(p, Projection):
        return p
    if callable(p):
        return CustomProjection(p)
    msg = f"expected a Projection or a callable, got {type(p).__name__}"
    raise TypeError(msg)


def lat2y(lat: Float) -> Float:
    """Latitude in degrees to Web Mercator ``y`` in meters."""
    rad = np.deg2rad(FLOAT(lat))
    return FLOAT(np.log(np.tan(rad / _TWO + _QUARTER_PI)) * EARTH_RADIUS)


def lon2x(lon: Float) -> Float:
    """Longitude in degrees to Web Mercator ``x`` in meters."""
    return FLOAT(EARTH_RADIUS * np.deg2rad(FLOAT(lon)))


def y2lat(y: Float) -> Float:
    """Web Mercator ``y`` in meters to latitude in degrees."""
    rad = _TWO * np.arctan(np.exp(FLOAT(y) / EARTH_RADIUS)) - _HALF_PI
    return FLOAT(np.rad2deg(rad))


def x2lon(x: Float) -> Float:
    """Web Mercator ``x`` in meters to longitude in degrees."""
    return FLOAT(np.rad2deg(FLOAT(x) / EARTH_RADIUS))
