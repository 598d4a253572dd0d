import math

from osmjson import parse
from osmjson._env import FLOAT_BITS
from osmjson.model import Bounds, Coordinate, Metadata, Node, OsmData, Way, merge_tags

import pytest


BOUNDS = Bounds(
    min=Coordinate(41.30365, -81.90212),
    max=Coordinate(41.30453, -81.90126),
)

CORNER_NODES = {
    1: Node.from_coordinate(Coordinate(41.30365, -81.90171), id=1),
    2: Node.from_coordinate(Coordinate(41.30453, -81.90169), id=2),
    3: Node.from_coordinate(Coordinate(41.30407, -81.90212), id=3),
    4: Node.from_coordinate(Coordinate(41.30407, -81.90126), id=4),
}


@pytest.mark.xdist_group(name="fast")
def test_coordinate_constants():
    assert Coordinate.ZERO == Coordinate(0.0, 0.0)
    assert Coordinate.MIN == Coordinate(-90.0, -180.0)
    assert Coordinate.MAX == Coordinate(90.0, 180.0)
    assert Coordinate.INF.lat == math.inf and Coordinate.INF.lon == math.inf
    assert Coordinate.NEG_INF.lat == -math.inf and Coordinate.NEG_INF.lon == -math.inf

    assert Bounds.ZERO == Bounds(min=Coordinate.ZERO, max=Coordinate.ZERO)
    assert Bounds.FULL == Bounds(min=Coordinate.MIN, max=Coordinate.MAX)


@pytest.mark.xdist_group(name="fast")
def test_coordinate_no_clamping():
    c = Coordinate(123.0, -500.0)
    assert c.lat == 123.0
    assert c.lon == -500.0


@pytest.mark.xdist_group(name="fast")
def test_coordinate_of():
    assert Coordinate.of((50.0, 10.0)) == Coordinate(50.0, 10.0)
    assert Coordinate.of([50.0, 10.0]) == Coordinate(50.0, 10.0)

    with pytest.raises(ValueError):
        Coordinate.of((1.0, 2.0, 3.0))


@pytest.mark.xdist_group(name="fast")
def test_coordinate_copy():
    c = Coordinate(1.0, 2.0)
    copy = c.copy()
    copy.lat = 3.0

    assert c == Coordinate(1.0, 2.0)
    assert copy == Coordinate(3.0, 2.0)


@pytest.mark.xdist_group(name="fast")
def test_calculate_bounds():
    assert Bounds.calculate(CORNER_NODES) == BOUNDS


@pytest.mark.xdist_group(name="fast")
def test_calculate_bounds_empty():
    bounds = Bounds.calculate({})

    assert bounds == Bounds.ZERO
    assert not math.isinf(bounds.min.lat)

    # the result must not alias the constant
    bounds.min.lat = 5.0
    assert Bounds.ZERO.min.lat == 0.0


@pytest.mark.xdist_group(name="fast")
def test_calculate_bounds_single_node():
    nodes = {7: Node.from_coordinate(Coordinate(-33.9, 151.2), id=7)}
    bounds = Bounds.calculate(nodes)

    assert bounds.min == bounds.max == Coordinate(-33.9, 151.2)


@pytest.mark.xdist_group(name="fast")
@pytest.mark.parametrize(
    "positions",
    [
        [(0.0, 0.0), (1.0, 1.0)],
        [(-89.9, -179.9), (89.9, 179.9), (0.5, -0.5)],
        [(52.5, 13.4), (52.5, 13.4), (52.6, 13.3), (52.4, 13.5)],
        [(1e-9, -1e-9), (-1e-9, 1e-9)],
        [(10.0, 20.0), (-10.0, 30.0), (5.0, -40.0), (0.0, 0.0), (60.0, 25.0)],
    ],
)
def test_calculate_bounds_is_tight(positions):
    nodes = {i: Node.from_coordinate(Coordinate.of(p), id=i) for i, p in enumerate(positions)}
    bounds = Bounds.calculate(nodes)

    assert all(bounds.contains(node.pos) for node in nodes.values())
    assert any(node.pos.lat == bounds.min.lat for node in nodes.values())
    assert any(node.pos.lat == bounds.max.lat for node in nodes.values())
    assert any(node.pos.lon == bounds.min.lon for node in nodes.values())
    assert any(node.pos.lon == bounds.max.lon for node in nodes.values())

    assert bounds.min.lat <= bounds.max.lat
    assert bounds.min.lon <= bounds.max.lon

    # idempotent
    assert Bounds.calculate(nodes) == bounds


@pytest.mark.xdist_group(name="fast")
def test_center():
    center = BOUNDS.center()

    if FLOAT_BITS == 64:
        assert center.lat == pytest.approx(41.30409, abs=1e-12)
        assert center.lon == pytest.approx(-81.90169, abs=1e-12)
    else:
        assert center.lat == pytest.approx(41.304092, abs=1e-5)
        assert center.lon == pytest.approx(-81.90169, abs=1e-5)


@pytest.mark.xdist_group(name="fast")
def test_center_antimeridian():
    # a plain average, not the geodesic center
    bounds = Bounds(min=Coordinate(-10.0, -170.0), max=Coordinate(10.0, 170.0))
    assert bounds.center() == Coordinate(0.0, 0.0)


@pytest.mark.xdist_group(name="fast")
def test_contains():
    assert BOUNDS.contains(BOUNDS.min)
    assert BOUNDS.contains(BOUNDS.max)
    assert BOUNDS.contains(BOUNDS.center())
    assert not BOUNDS.contains(Coordinate(41.3, -81.9))


@pytest.mark.xdist_group(name="fast")
def test_osm_data_calculate_bounds(map_bbox_text):
    data = parse(map_bbox_text)
    data.calculate_bounds()

    assert data.bounds == BOUNDS
    assert data.bounds.center() == BOUNDS.center()


@pytest.mark.xdist_group(name="fast")
def test_osm_data_calculate_bounds_empty():
    data = OsmData(bounds=BOUNDS.copy())
    assert data.is_empty

    data.calculate_bounds()
    assert data.bounds == Bounds.ZERO


@pytest.mark.xdist_group(name="fast")
def test_osm_data_defaults():
    data = OsmData()

    assert data.bounds == Bounds.ZERO
    assert data.bounds is not Bounds.ZERO
    assert data.nodes == {}
    assert data.ways == {}
    assert repr(data) == "OsmData(nodes=0, ways=0)"

    data.ways[1] = Way(id=1, node_ids=[1, 2])
    assert not data.is_empty


@pytest.mark.xdist_group(name="fast")
def test_element_helpers():
    node = Node(id=42, pos=Coordinate(1.0, 2.0), tags={"amenity": "bench"})
    way = Way(id=43, node_ids=[42])

    assert node.type == "node"
    assert way.type == "way"
    assert node.link == "https://www.openstreetmap.org/node/42"
    assert way.link == "https://www.openstreetmap.org/way/43"
    assert repr(node) == "Node(42)"
    assert repr(way) == "Way(43)"
    assert node.tag("amenity") == "bench"
    assert way.tag("amenity", "none") == "none"
    assert node.meta == Metadata()
    assert way.tags == {}


@pytest.mark.xdist_group(name="fast")
def test_merge_tags():
    to = {"1": "3", "name": "Library"}
    merge_tags(to, {"1": "2", "building": "yes"})

    assert to == {"1": "2", "name": "Library", "building": "yes"}


@pytest.mark.xdist_group(name="fast")
def test_merge_tags_empty():
    to = {"name": "Library"}
    merge_tags(to, {})
    assert to == {"name": "Library"}

    to = {}
    merge_tags(to, {"name": "Library"})
    assert to == {"name": "Library"}


@pytest.mark.xdist_group(name="fast")
def test_merge_tags_into_node():
    node = Node(id=1, pos=Coordinate(0.0, 0.0))
    merge_tags(node.tags, {"highway": "crossing"})
    merge_tags(node.tags, {"highway": "traffic_signals", "crossing": "zebra"})

    assert node.tags == {"highway": "traffic_signals", "crossing": "zebra"}
