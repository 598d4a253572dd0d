"""Typed OpenStreetMap data."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import ClassVar, TypeAlias

from osmjson._float import FLOAT, INF, NEG_INF, Float
from osmjson.projection import WEB_MERCATOR, ProjectionLike, _projection
from osmjson.spatial import GeoJsonDict, Spatial, _geojson_geometry

from shapely.geometry import Point, Polygon, box


__docformat__ = "google"
__all__ = (
    "Id",
    "Tags",
    "Nodes",
    "Ways",
    "Coordinate",
    "Bounds",
    "Metadata",
    "Element",
    "Node",
    "Way",
    "OsmData",
    "merge_tags",
)


Id: TypeAlias = int
"""Unsigned 64-bit element ID. Nodes and ways each have their own ID space."""

Tags: TypeAlias = dict[str, str]
"""Key-value pairs that describe an element."""


@dataclass(slots=True)
class Coordinate:
    """
    A position in degrees, or in planar units after projecting it.

    Values are not clamped to valid latitude and longitude ranges.

    The class constants ``ZERO``, ``MIN``, ``MAX``, ``INF`` and ``NEG_INF`` are shared,
    mutable instances. Use ``copy()`` before changing one of them.

    Attributes:
        lat: latitude, or ``y`` when projected
        lon: longitude, or ``x`` when projected
    """

    ZERO: ClassVar["Coordinate"]
    MIN: ClassVar["Coordinate"]
    MAX: ClassVar["Coordinate"]
    INF: ClassVar["Coordinate"]
    NEG_INF: ClassVar["Coordinate"]

    lat: Float
    lon: Float

    def __post_init__(self) -> None:
        self.lat = FLOAT(self.lat)
        self.lon = FLOAT(self.lon)

    @classmethod
    def of(cls, pair: Sequence[float]) -> "Coordinate":
        """Coordinate from a ``(lat, lon)`` pair."""
        lat, lon = pair
        return cls(lat, lon)

    def copy(self) -> "Coordinate":
        """An independent copy of this coordinate."""
        return Coordinate(self.lat, self.lon)

    def convert_to(self, projection: ProjectionLike = WEB_MERCATOR) -> None:
        """Convert this geographic coordinate to planar space in place."""
        _projection(projection).forward(self)

    def revert_from(self, projection: ProjectionLike = WEB_MERCATOR) -> None:
        """Convert this planar coordinate back to geographic space in place."""
        _projection(projection).backward(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self.lat)!r}, {float(self.lon)!r})"


Coordinate.ZERO = Coordinate(0.0, 0.0)
Coordinate.MIN = Coordinate(-90.0, -180.0)
Coordinate.MAX = Coordinate(90.0, 180.0)
Coordinate.INF = Coordinate(INF, INF)
Coordinate.NEG_INF = Coordinate(NEG_INF, NEG_INF)


@dataclass(kw_only=True, slots=True)
class Bounds(Spatial):
    """
    An axis-aligned rectangle in geographic space.

    Attributes:
        min: the south-west corner
        max: the north-east corner
    """

    ZERO: ClassVar["Bounds"]
    FULL: ClassVar["Bounds"]

    min: Coordinate
    max: Coordinate

    @classmethod
    def calculate(cls, nodes: Mapping[Id, "Node"]) -> "Bounds":
        """
        Compute the exact bounds of the given nodes.

        Every node lies within the result, and each of its four sides touches at least
        one node. An empty mapping results in ``Bounds.ZERO``.
        """
        if not nodes:
            return cls.ZERO.copy()

        lo = Coordinate.INF.copy()
        hi = Coordinate.NEG_INF.copy()

        for node in nodes.values():
            lo.lat = min(lo.lat, node.pos.lat)
            lo.lon = min(lo.lon, node.pos.lon)
            hi.lat = max(hi.lat, node.pos.lat)
            hi.lon = max(hi.lon, node.pos.lon)

        return cls(min=lo, max=hi)

    def center(self) -> Coordinate:
        """
        The arithmetic center of these bounds.

        There is no special handling of bounds that cross the antimeridian.
        """
        return Coordinate(
            (self.min.lat + self.max.lat) / 2.0,
            (self.min.lon + self.max.lon) / 2.0,
        )

    def contains(self, coord: Coordinate) -> bool:
        """``True`` if the coordinate lies inside or on the edge of these bounds."""
        return (
            self.min.lat <= coord.lat <= self.max.lat
            and self.min.lon <= coord.lon <= self.max.lon
        )

    def copy(self) -> "Bounds":
        """An independent copy of these bounds."""
        return Bounds(min=self.min.copy(), max=self.max.copy())

    @property
    def geometry(self) -> Polygon:
        """These bounds as a Polygon, with (lat, lon) as x/y."""
        return box(self.min.lat, self.min.lon, self.max.lat, self.max.lon)

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """These bounds as a GeoJSON bounding box ``(minlon, minlat, maxlon, maxlat)``."""
        return (
            float(self.min.lon),
            float(self.min.lat),
            float(self.max.lon),
            float(self.max.lat),
        )

    @property
    def geojson(self) -> GeoJsonDict:
        """A ``Feature`` with ``Polygon`` geometry and no properties."""
        return {
            "type": "Feature",
            "geometry": _geojson_geometry(self.geometry),
            "properties": {},
            "bbox": self.bbox,
        }


Bounds.ZERO = Bounds(min=Coordinate.ZERO.copy(), max=Coordinate.ZERO.copy())
Bounds.FULL = Bounds(min=Coordinate.MIN.copy(), max=Coordinate.MAX.copy())


@dataclass(kw_only=True, slots=True)
class Metadata:
    """
    Metadata concerning the most recent edit of an OSM element.

    Attributes:
        timestamp: Timestamp (ISO 8601) of the most recent change of this element
        version: The version number of the element
        changeset: The changeset in which the element was most recently changed
        user: Name of the user that made the most recent change to the element
    """

    timestamp: str = ""
    version: int = 0
    changeset: int = 0
    user: str = ""


@dataclass(kw_only=True, slots=True, repr=False)
class Element:
    """
    Common fields of nodes and ways.

    Attributes:
        id: A number that uniquely identifies an element of a certain type
        meta: Metadata of the element's most recent edit
        tags: Key-value pairs that describe the element

    References:
        - https://wiki.openstreetmap.org/wiki/Elements
    """

    id: Id
    meta: Metadata = field(default_factory=Metadata)
    tags: Tags = field(default_factory=dict)

    def tag(self, key: str, default: str | None = None) -> str | None:
        """Get the tag value for the given key, or ``default`` if there is no such tag."""
        return self.tags.get(key, default)

    @property
    def type(self) -> str:
        """The element's type: "node" or "way"."""
        match self:
            case Node():
                return "node"
            case Way():
                return "way"
            case _:
                raise AssertionError

    @property
    def link(self) -> str:
        """This element on openstreetmap.org."""
        return f"https://www.openstreetmap.org/{self.type}/{self.id}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id})"


@dataclass(kw_only=True, slots=True, repr=False)
class Node(Element, Spatial):
    """
    A point in space, at a specific coordinate.

    Attributes:
        pos: The node's position. Projecting the node rewrites it in place.

    References:
        - https://wiki.openstreetmap.org/wiki/Node
    """

    pos: Coordinate

    @classmethod
    def from_coordinate(cls, coord: Coordinate, id: Id = 0) -> "Node":  # noqa: A002
        """A node without tags or metadata."""
        return cls(id=id, pos=coord)

    def convert_to(self, projection: ProjectionLike = WEB_MERCATOR) -> None:
        """Convert the node's position to planar space in place."""
        self.pos.convert_to(projection)

    def revert_from(self, projection: ProjectionLike = WEB_MERCATOR) -> None:
        """Convert the node's position back to geographic space in place."""
        self.pos.revert_from(projection)

    @property
    def geometry(self) -> Point:
        """The node's position as a Point, with (lat, lon) as x/y."""
        return Point(self.pos.lat, self.pos.lon)

    @property
    def geojson(self) -> GeoJsonDict:
        """
        A ``Feature`` with ``Point`` geometry.

        Its properties are ``id``, ``tags``, ``timestamp``, ``version``, ``changeset``
        and ``user``.
        """
        return {
            "type": "Feature",
            "geometry": _geojson_geometry(self.geometry),
            "properties": {
                "id": self.id,
                "tags": self.tags,
                "timestamp": self.meta.timestamp,
                "version": self.meta.version,
                "changeset": self.meta.changeset,
                "user": self.meta.user,
            },
        }


@dataclass(kw_only=True, slots=True, repr=False)
class Way(Element):
    """
    A way is an ordered list of nodes.

    Ways reference their nodes by ID only. These references are neither resolved
    nor checked, so a way may point to nodes that are not part of the data set.

    Attributes:
        node_ids: The IDs of the nodes that make up this way.

    References:
        - https://wiki.openstreetmap.org/wiki/Way
    """

    node_ids: list[Id] = field(default_factory=list)


Nodes: TypeAlias = dict[Id, Node]
Ways: TypeAlias = dict[Id, Way]


@dataclass(kw_only=True, slots=True, repr=False)
class OsmData(Spatial):
    """
    The map data of a bounding box.

    This is open data, licensed under the Open Data Commons Open Database License (ODbL).
    You are free to copy, distribute, transmit and adapt this data, as long as you credit
    OpenStreetMap and its contributors.

    Attributes:
        version: API version of the response
        generator: the server software that produced the response
        copyright: copyright notice that comes with the data
        attribution: link to the attribution guidelines
        license: link to the data license
        bounds: The bounds declared by the source, until ``calculate_bounds()`` replaces
                them with the exact bounds of ``nodes``.
        nodes: all nodes by ID
        ways: all ways by ID

    References:
        - https://wiki.openstreetmap.org/wiki/API_v0.6#Retrieving_map_data_by_bounding_box:_GET_/api/0.6/map
        - https://www.openstreetmap.org/copyright
    """

    version: str = ""
    generator: str = ""
    copyright: str = ""
    attribution: str = ""
    license: str = ""
    bounds: Bounds = field(default_factory=Bounds.ZERO.copy)
    nodes: Nodes = field(default_factory=dict)
    ways: Ways = field(default_factory=dict)

    def calculate_bounds(self) -> None:
        """Replace ``bounds`` with the exact bounds of all nodes."""
        self.bounds = Bounds.calculate(self.nodes)

    @property
    def is_empty(self) -> bool:
        """``True`` if there are neither nodes nor ways."""
        return not self.nodes and not self.ways

    def convert_to(self, projection: ProjectionLike = WEB_MERCATOR) -> None:
        """Convert the position of every node to planar space in place."""
        p = _projection(projection)
        for node in self.nodes.values():
            p.forward(node.pos)

    def revert_from(self, projection: ProjectionLike = WEB_MERCATOR) -> None:
        """Convert the position of every node back to geographic space in place."""
        p = _projection(projection)
        for node in self.nodes.values():
            p.backward(node.pos)

    @property
    def geojson(self) -> GeoJsonDict:
        """A ``FeatureCollection`` of all nodes, with ``bounds`` as its bounding box."""
        return {
            "type": "FeatureCollection",
            "features": [node.geojson for node in self.nodes.values()],
            "bbox": self.bounds.bbox,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={len(self.nodes)}, ways={len(self.ways)})"


def merge_tags(to: Tags, from_: Tags) -> None:
    """
    Merge ``from_`` into ``to``.

    For keys that are in both, the value in ``from_`` wins.
    """
    to.update(from_)
