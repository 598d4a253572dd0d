"""
Parse the JSON map data of the OSM API.

The input is the response to a bounding box query, which mixes nodes, ways and relations
in a single ``elements`` array:

```
{
  "version": "0.6", "generator": "...", "copyright": "...",
  "attribution": "...", "license": "...",
  "bounds": {"minlat": 41.30365, "minlon": -81.90212, "maxlat": 41.30453, "maxlon": -81.90126},
  "elements": [
    {"type": "node", "id": 1, "lat": 41.30365, "lon": -81.90171, ...},
    {"type": "way", "id": 2, "nodes": [1, ...], ...},
    {"type": "relation", ...}
  ]
}
```

References:
    - https://wiki.openstreetmap.org/wiki/API_v0.6#Retrieving_map_data_by_bounding_box:_GET_/api/0.6/map
    - https://wiki.openstreetmap.org/wiki/OSM_JSON
"""

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, TypeAlias

from osmjson._float import FLOAT, FLOAT_MAX, Float
from osmjson.error import MalformedInputError, SchemaError, UnknownElementTypeError
from osmjson.model import Bounds, Coordinate, Id, Metadata, Node, Nodes, OsmData, Tags, Way, Ways


__docformat__ = "google"
__all__ = (
    "parse",
    "ElementKind",
)


_U32_MAX: Final = 2**32 - 1
_U64_MAX: Final = 2**64 - 1

_DEFAULT_LOGGER = logging.getLogger("osmjson")
_DEFAULT_LOGGER.addHandler(logging.NullHandler())

_JsonDict: TypeAlias = dict[str, Any]
"""A dictionary representing a JSON object of the input."""


class ElementKind(Enum):
    """The element types an OSM API response may contain."""

    NODE = "node"
    WAY = "way"
    RELATION = "relation"
    """Relations are not supported, and skipped when parsing."""


@dataclass(kw_only=True, slots=True)
class _RawBounds:
    """The ``bounds`` object as it is found in the input."""

    minlat: Float
    maxlat: Float
    minlon: Float
    maxlon: Float

    def to_bounds(self) -> Bounds:
        return Bounds(
            min=Coordinate(self.minlat, self.minlon),
            max=Coordinate(self.maxlat, self.maxlon),
        )


def parse(text: str | bytes, logger: logging.Logger = _DEFAULT_LOGGER) -> OsmData:
    """
    Parse the JSON response of an OSM API map query.

    Nodes and ways are collected by their ID. If an ID appears twice, the later element
    replaces the earlier one. Relations are skipped. The declared ``bounds`` of the response
    are kept as they are; use ``OsmData.calculate_bounds()`` to replace them with the exact
    bounds of the nodes.

    Args:
        text: the response body
        logger: the logger to use for all logging output related to this call

    Returns:
        the fully populated map data

    Raises:
        MalformedInputError: if ``text`` is not valid JSON, or not UTF-8 encoded
        SchemaError: if a required field is missing, a field has the wrong type,
            or a number is too large for the configured float width
        UnknownElementTypeError: if an element is neither a node, way, nor relation
    """
    try:
        envelope = json.loads(text, parse_constant=_reject_constant)
    except ValueError as err:
        # also covers UnicodeDecodeError, and the digit limit of int literals
        raise MalformedInputError(cause=err) from err

    envelope = _object(envelope, "$")

    raw_bounds = _raw_bounds(_object(_field(envelope, "bounds", "$"), "$.bounds"))
    elements = _field(envelope, "elements", "$")
    if not isinstance(elements, list):
        raise SchemaError(path="$.elements", reason=f"expected array, got {_kind(elements)}")

    nodes: Nodes = {}
    ways: Ways = {}
    nb_relations = 0

    for i, elem in enumerate(elements):
        path = f"$.elements[{i}]"
        elem = _object(elem, path)

        match _element_kind(elem, path):
            case ElementKind.NODE:
                node = _node(elem, path)
                if node.id in nodes:
                    logger.debug(f"replace node {node.id} with the one at '{path}'")
                nodes[node.id] = node
            case ElementKind.WAY:
                way = _way(elem, path)
                if way.id in ways:
                    logger.debug(f"replace way {way.id} with the one at '{path}'")
                ways[way.id] = way
            case ElementKind.RELATION:
                logger.debug(f"skip relation at '{path}'")
                nb_relations += 1
            case _:
                raise AssertionError

    data = OsmData(
        version=_str(envelope, "version", "$"),
        generator=_str(envelope, "generator", "$"),
        copyright=_str(envelope, "copyright", "$"),
        attribution=_str(envelope, "attribution", "$"),
        license=_str(envelope, "license", "$"),
        bounds=raw_bounds.to_bounds(),
        nodes=nodes,
        ways=ways,
    )

    logger.info(
        f"parsed {len(nodes)} nodes and {len(ways)} ways, skipped {nb_relations} relations"
    )

    return data


def _reject_constant(name: str) -> Any:
    msg = f"invalid literal {name!r}"
    raise ValueError(msg)


def _element_kind(elem: _JsonDict, path: str) -> ElementKind:
    elem_type = _str(elem, "type", path)
    try:
        return ElementKind(elem_type)
    except ValueError:
        raise UnknownElementTypeError(path=path, element_type=elem_type) from None


def _node(elem: _JsonDict, path: str) -> Node:
    return Node(
        id=_uint(elem, "id", path, _U64_MAX),
        pos=Coordinate(_float(elem, "lat", path), _float(elem, "lon", path)),
        meta=_meta(elem, path),
        tags=_tags(elem, path),
    )


def _way(elem: _JsonDict, path: str) -> Way:
    node_ids = _field(elem, "nodes", path)
    if not isinstance(node_ids, list):
        raise SchemaError(path=f"{path}.nodes", reason=f"expected array, got {_kind(node_ids)}")

    return Way(
        id=_uint(elem, "id", path, _U64_MAX),
        meta=_meta(elem, path),
        tags=_tags(elem, path),
        node_ids=[_check_uint(v, f"{path}.nodes[{i}]", _U64_MAX) for i, v in enumerate(node_ids)],
    )


def _meta(elem: _JsonDict, path: str) -> Metadata:
    return Metadata(
        timestamp=_str(elem, "timestamp", path),
        version=_uint(elem, "version", path, _U32_MAX),
        changeset=_uint(elem, "changeset", path, _U64_MAX),
        user=_str(elem, "user", path),
    )


def _tags(elem: _JsonDict, path: str) -> Tags:
    """Tags of an element, which are empty if missing or ``null``."""
    tags = elem.get("tags")
    if tags is None:
        return {}

    tags = _object(tags, f"{path}.tags")
    for key, value in tags.items():
        if not isinstance(value, str):
            raise SchemaError(
                path=f"{path}.tags.{key}",
                reason=f"expected string, got {_kind(value)}",
            )
    return tags


def _raw_bounds(obj: _JsonDict) -> _RawBounds:
    return _RawBounds(
        minlat=_float(obj, "minlat", "$.bounds"),
        maxlat=_float(obj, "maxlat", "$.bounds"),
        minlon=_float(obj, "minlon", "$.bounds"),
        maxlon=_float(obj, "maxlon", "$.bounds"),
    )


def _field(obj: _JsonDict, key: str, path: str) -> Any:
    if key not in obj:
        raise SchemaError(path=f"{path}.{key}", reason="missing field")
    return obj[key]


def _object(value: Any, path: str) -> _JsonDict:
    if not isinstance(value, dict):
        raise SchemaError(path=path, reason=f"expected object, got {_kind(value)}")
    return value


def _str(obj: _JsonDict, key: str, path: str) -> str:
    value = _field(obj, key, path)
    if not isinstance(value, str):
        raise SchemaError(path=f"{path}.{key}", reason=f"expected string, got {_kind(value)}")
    return value


def _float(obj: _JsonDict, key: str, path: str) -> Float:
    value = _field(obj, key, path)
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise SchemaError(path=f"{path}.{key}", reason=f"expected number, got {_kind(value)}")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not abs(number) <= FLOAT_MAX:
        raise SchemaError(path=f"{path}.{key}", reason="number out of range")
    return FLOAT(number)


def _uint(obj: _JsonDict, key: str, path: str, max_value: int) -> int:
    return _check_uint(_field(obj, key, path), f"{path}.{key}", max_value)


def _check_uint(value: Any, path: str, max_value: int) -> Id:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(path=path, reason=f"expected integer, got {_kind(value)}")
    if not 0 <= value <= max_value:
        raise SchemaError(path=path, reason=f"expected integer in [0, {max_value}], got {value}")
    return value


def _kind(value: Any) -> str:
    """Name of the JSON type of a decoded value."""
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case list():
            return "array"
        case dict():
            return "object"
        case _:
            return type(value).__name__
