import os
from typing import Final


__docformat__ = "google"
__all__ = ("FLOAT_BITS",)


def _float_bits() -> int:
    value = os.environ.get("OSMJSON_FLOAT_BITS", "64").strip()
    if value not in {"32", "64"}:
        msg = f"'OSMJSON_FLOAT_BITS' must be '32' or '64', not {value!r}"
        raise ValueError(msg)
    return int(value)


FLOAT_BITS: Final[int] = _float_bits()
"""Width of all floating point values, chosen once per process."""
