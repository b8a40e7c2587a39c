"""Per-transfer caps layered over a container.

A limiter wraps one container and a cap, and is built right before a single
transfer::

    consumer.receive_from(ProvideLimiter(provider, 127.5))
    provider.give_to(ConsumeLimiter(consumer, 127.5))

It keeps no state of its own: balance changes go straight to the wrapped
container, and only one of the two reported capabilities is capped.
"""

from __future__ import annotations

from typing import Any

from vessel.core.container import Container
from vessel.core.transfer import TransferEndpoint
from vessel.core.units import ResourceTag


class _Limiter(TransferEndpoint):
    __slots__ = ("container", "cap")

    def __init__(self, container: Container, cap: Any):
        """Wrap *container* with a per-transfer *cap*.

        Args:
            container: Container to wrap.  Not owned by the limiter.
            cap: Maximum units exposed for one transfer (>= 0).

        Raises:
            ValueError: If cap is negative.
        """
        if cap < 0:
            raise ValueError("cap must be >= 0.")
        self.container: Container = container
        self.cap: Any = container.tag.units(cap)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.container!r}, cap={self.cap})"

    @property
    def tag(self) -> ResourceTag:
        return self.container.tag

    def get_request_units(self) -> Any:
        return self.container.get_request_units()

    def get_available_units(self) -> Any:
        return self.container.get_available_units()

    def adjust(self, delta: Any) -> None:
        self.container.adjust(delta)


class ProvideLimiter(_Limiter):
    """Caps how much the wrapped source yields in one transfer.

    Incoming room is reported unchanged.
    """

    __slots__ = ()

    def get_request_units(self) -> Any:
        """Return ``min(container.get_request_units(), cap)``."""
        return min(self.container.get_request_units(), self.cap)


class ConsumeLimiter(_Limiter):
    """Caps how much the wrapped destination accepts in one transfer.

    Outgoing quantity is reported unchanged.
    """

    __slots__ = ()

    def get_available_units(self) -> Any:
        """Return ``min(container.get_available_units(), cap)``."""
        return min(self.container.get_available_units(), self.cap)
