"""Resource tags and their numeric unit representations.

A resource tag identifies what kind of quantity a container holds (fuel,
coolant, charge, ...).  Each tag binds one numeric type, resolved once when
containers for that resource are created.  Containers of different tags
never exchange units.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

_UNITS_TYPES: dict[str, Callable[[Any], Any]] = {
    "float": float,
    "int": int,
    "float32": np.float32,
    "float64": np.float64,
    "int32": np.int32,
    "int64": np.int64,
}


def resolve_units_type(name: str) -> Callable[[Any], Any]:
    """Return the numeric type registered under *name*.

    Args:
        name: Config label such as ``"float"`` or ``"float32"``.

    Raises:
        ValueError: If the label is not registered.
    """
    try:
        return _UNITS_TYPES[name]
    except KeyError:
        known = ", ".join(sorted(_UNITS_TYPES))
        raise ValueError(
            f"Unknown units type '{name}' (expected one of: {known})"
        ) from None


@dataclass(frozen=True)
class ResourceTag:
    """Immutable binding of a resource kind to its numeric representation.

    Attributes:
        name: Resource label (e.g. "fuel").
        units_type: Numeric constructor used for every quantity of this
            resource.  Must support ordering, addition and subtraction.
    """

    name: str
    units_type: Callable[[Any], Any] = float

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Resource tag name must be non-empty.")

    def units(self, value: Any) -> Any:
        """Convert *value* into this tag's unit representation."""
        return self.units_type(value)


DEFAULT_TAG = ResourceTag(name="units", units_type=float)
