"""
Typed OpenStreetMap map data from the JSON responses of the OSM API.

```python
from osmjson import parse

data = parse(text)
data.calculate_bounds()
center = data.bounds.center()
data.convert_to()  # Web Mercator
```
"""

import importlib.metadata


__version__: str = importlib.metadata.version("osmjson")

# we add this to all modules for pdoc;
# see https://pdoc.dev/docs/pdoc.html#use-numpydoc-or-google-docstrings
__docformat__ = "google"

# we also use __all__ in all modules for pdoc; this lets us control the order
__all__ = (
    "__version__",
    "parse",
    "OsmData",
    "Node",
    "Way",
    "Coordinate",
    "Bounds",
    "Metadata",
    "Tags",
    "merge_tags",
    "Projection",
    "WebMercator",
    "CustomProjection",
    "WEB_MERCATOR",
    "ParseError",
    "error",
    "model",
    "parser",
    "projection",
    "spatial",
)

from .error import ParseError
from .model import Bounds, Coordinate, Metadata, Node, OsmData, Tags, Way, merge_tags
from .parser import parse
from .projection import WEB_MERCATOR, CustomProjection, Projection, WebMercator
