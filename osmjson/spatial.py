"""Basic definitions for (groups of) geospatial objects."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeAlias

import shapely.geometry
import shapely.ops
from shapely.geometry.base import BaseGeometry


__docformat__ = "google"
__all__ = (
    "GeoJsonDict",
    "SpatialDict",
    "Spatial",
)


GeoJsonDict: TypeAlias = dict[str, Any]
"""A dictionary representing a GeoJSON object."""


@dataclass(kw_only=True, slots=True)
class SpatialDict:
    """
    Mapping of spatial objects with the ``__geo_interface__`` property.

    The ``__geo_interface__`` protocol was [proposed](https://gist.github.com/sgillies/2217756)
    by Sean Gillies. Shapely's ``shape()`` f.e. accepts any object that has it.

    Attributes:
        __geo_interface__: the GeoJSON mapping of the spatial object
    """

    __geo_interface__: dict


class Spatial(ABC):
    """
    Base class for objects that can be exported as GeoJSON.

    Shapely geometries of this package use (latitude, longitude) as their x/y order,
    while GeoJSON coordinates are (longitude, latitude) in ``CRS:84``. The ``geojson``
    property takes care of the flip.

    Exporting only makes sense while coordinates are geographic; after projecting
    ``OsmData`` to planar space, the output no longer describes longitudes and latitudes.

    References:
        - https://tools.ietf.org/html/rfc7946#section-4
    """

    __slots__ = ()

    @property
    @abstractmethod
    def geojson(self) -> GeoJsonDict:
        """A mapping of this object, using the GeoJSON format."""
        raise NotImplementedError

    @property
    def geo_interfaces(self) -> Iterator[SpatialDict]:
        """A mapping of this object to ``SpatialDict``s that implement ``__geo_interface__``."""
        geojson = self.geojson
        match geojson["type"]:
            case "FeatureCollection":
                for feature in geojson["features"]:
                    yield SpatialDict(__geo_interface__=feature)
            case _:
                yield SpatialDict(__geo_interface__=geojson)


def _geojson_geometry(geom: BaseGeometry) -> GeoJsonDict:
    """Map a (lat, lon) Shapely geometry to a GeoJSON geometry in (lon, lat) order."""
    flipped = shapely.ops.transform(lambda lat, lon: (lon, lat), geom)
    return dict(shapely.geometry.mapping(flipped))
