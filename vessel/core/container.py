"""Bounded resource container for the Vessel flow model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from vessel.core.transfer import TransferEndpoint
from vessel.core.units import DEFAULT_TAG, ResourceTag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Properties:
    """Immutable container configuration.

    Attributes:
        capacity: Maximum quantity the container can hold (>= 0).
    """

    capacity: Any

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError("capacity must be >= 0.")


@dataclass(frozen=True)
class State:
    """Detached snapshot of a container's fill level.

    A state carries no capacity, so it can be saved from one container and
    loaded into another.

    Attributes:
        fill_level: Quantity held at the time of the snapshot (>= 0).
    """

    fill_level: Any

    def __post_init__(self) -> None:
        if self.fill_level < 0:
            raise ValueError("fill_level must be >= 0.")


class Container(TransferEndpoint):
    """Finite reservoir of a single resource.

    A new container starts full.  Its level changes only through
    :meth:`load_state` or a transfer; at every observable point
    ``get_request_units() + get_available_units() == capacity`` as long as
    the loaded states were consistent with the capacity.

    Attributes:
        properties: Fixed configuration (capacity).
        tag: Resource this container holds.
        name: Optional label used in logs and reprs.
    """

    __slots__ = ("properties", "_tag", "name", "_fill_level")

    def __init__(
        self,
        properties: Properties,
        tag: ResourceTag = DEFAULT_TAG,
        name: str = "",
    ):
        """Initialise a full container.

        Args:
            properties: Container configuration.
            tag: Resource binding; quantities use its unit representation.
            name: Optional label.
        """
        self.properties: Properties = properties
        self._tag: ResourceTag = tag
        self.name: str = name
        self._fill_level: Any = tag.units(properties.capacity)

    def __repr__(self) -> str:
        label = self.name or self._tag.name
        return (
            f"Container({label!r}, fill_level={self._fill_level}, "
            f"capacity={self.capacity})"
        )

    @property
    def tag(self) -> ResourceTag:
        return self._tag

    @property
    def capacity(self) -> Any:
        return self._tag.units(self.properties.capacity)

    def get_available_units(self) -> Any:
        """Return the room left to receive (``capacity - fill_level``)."""
        return self.capacity - self._fill_level

    def get_request_units(self) -> Any:
        """Return the quantity this container can currently give away."""
        return self._fill_level

    def adjust(self, delta: Any) -> None:
        """Shift the fill level by a signed *delta* negotiated by a transfer."""
        self._fill_level = self._tag.units(self._fill_level + delta)

    def load_state(self, state: State) -> None:
        """Overwrite the fill level with ``state.fill_level``.

        The value is taken as-is.  A level above capacity is not clamped; it
        is logged and left for the caller to correct with a later load or
        transfer.
        """
        self._fill_level = self._tag.units(state.fill_level)
        if not self.is_consistent():
            logger.warning(
                "Loaded fill level %s exceeds capacity %s for %r",
                self._fill_level,
                self.capacity,
                self,
            )

    def save_state(self) -> State:
        """Return a snapshot of the current fill level."""
        return State(fill_level=self._fill_level)

    def is_consistent(self) -> bool:
        """Return True when ``0 <= fill_level <= capacity``."""
        return 0 <= self._fill_level <= self.capacity
