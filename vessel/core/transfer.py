"""Transfer negotiation shared by containers and limiters.

Every participant in a transfer exposes the same small contract: how much it
can give, how much room it has, and a hook that adjusts its balance by a
signed delta.  Limiters only change what the first two report; the
negotiation below is identical for every pairing.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar, runtime_checkable

from vessel.core.units import ResourceTag

logger = logging.getLogger(__name__)

_EndpointT = TypeVar("_EndpointT", bound="TransferEndpoint")


@runtime_checkable
class Participant(Protocol):
    """Anything that can stand on either side of a transfer."""

    @property
    def tag(self) -> ResourceTag: ...

    def get_request_units(self) -> Any: ...

    def get_available_units(self) -> Any: ...

    def adjust(self, delta: Any) -> None: ...


def transfer(giver: Participant, receiver: Participant) -> Any:
    """Move as much as both sides allow from *giver* to *receiver*.

    The moved amount is ``min(giver.get_request_units(),
    receiver.get_available_units())``.  The giver is debited and the
    receiver credited by exactly that amount, so the combined level of the
    two is unchanged.  A side reporting zero makes the call a no-op.

    Args:
        giver: Participant yielding units.
        receiver: Participant accepting units.

    Returns:
        The amount moved, in the giver's unit representation.

    Raises:
        ValueError: If the participants hold different resources.
    """
    if giver.tag != receiver.tag:
        raise ValueError(
            f"Cannot transfer between resources '{giver.tag.name}' "
            f"and '{receiver.tag.name}'."
        )

    amount = min(giver.get_request_units(), receiver.get_available_units())
    if amount <= 0:
        return giver.tag.units(0)

    giver.adjust(-amount)
    receiver.adjust(amount)
    logger.debug(
        "Transferred %s %s from %r to %r", amount, giver.tag.name, giver, receiver
    )
    return amount


class TransferEndpoint:
    """Chainable transfer methods for any :class:`Participant`.

    Both methods return ``self`` so several transfers against the same side
    can be written in one statement, each negotiated independently::

        consumer.receive_from(provider).receive_from(provider)
    """

    __slots__ = ()

    def receive_from(self: _EndpointT, giver: Participant) -> _EndpointT:
        """Pull units from *giver* into this participant and return self."""
        transfer(giver, self)  # type: ignore[arg-type]
        return self

    def give_to(self: _EndpointT, receiver: Participant) -> _EndpointT:
        """Push units from this participant into *receiver* and return self."""
        transfer(self, receiver)  # type: ignore[arg-type]
        return self
