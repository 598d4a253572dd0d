import json
from pathlib import Path

import pytest


DATA_DIR = Path(__file__).parent / "response_data"


@pytest.fixture
def map_bbox_text() -> str:
    with (DATA_DIR / "map_bbox.json").open(encoding="utf-8") as file:
        return file.read()


@pytest.fixture
def map_bbox_dict(map_bbox_text: str) -> dict:
    return json.loads(map_bbox_text)


@pytest.fixture
def node_dict() -> dict:
    return {
        "type": "node",
        "id": 1,
        "lat": 50.0,
        "lon": 10.0,
        "timestamp": "2020-01-01T00:00:00Z",
        "version": 1,
        "changeset": 100,
        "user": "mapper",
    }


@pytest.fixture
def way_dict() -> dict:
    return {
        "type": "way",
        "id": 2,
        "timestamp": "2020-01-01T00:00:00Z",
        "version": 1,
        "changeset": 100,
        "user": "mapper",
        "nodes": [1, 3, 1],
    }


@pytest.fixture
def relation_dict() -> dict:
    return {
        "type": "relation",
        "id": 3,
        "timestamp": "2020-01-01T00:00:00Z",
        "version": 1,
        "changeset": 100,
        "user": "mapper",
        "members": [{"type": "way", "ref": 2, "role": "outer"}],
    }


@pytest.fixture
def envelope():
    """Build the JSON text of a response with the given elements."""

    def make(*elements: dict, **overrides) -> str:
        obj = {
            "version": "0.6",
            "generator": "test",
            "copyright": "OpenStreetMap and contributors",
            "attribution": "http://www.openstreetmap.org/copyright",
            "license": "http://opendatacommons.org/licenses/odbl/1-0/",
            "bounds": {"minlat": 0.0, "maxlat": 1.0, "minlon": 0.0, "maxlon": 1.0},
            "elements": list(elements),
        }
        obj.update(overrides)
        return json.dumps(obj)

    return make
