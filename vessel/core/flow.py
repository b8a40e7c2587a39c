"""Stepped flow simulation between two transfer participants.

A flow repeats the same transfer once per step, optionally throttled to a
fixed rate, and records how levels evolve.  It is the pump/drain view of
the single-shot transfer protocol.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from vessel.core.container import Container
from vessel.core.limiters import ProvideLimiter
from vessel.core.transfer import Participant, transfer


def _level(participant: Participant) -> Any:
    # Limiters report a capped request; traces want the true level.
    while not isinstance(participant, Container):
        inner = getattr(participant, "container", None)
        if inner is None:
            return participant.get_request_units()
        participant = inner
    return participant.get_request_units()


def _step_rate(giver: Container, rate: float) -> Any:
    # Integer tags truncate fractional rates; a zero step never moves anything.
    step = giver.tag.units(rate)
    if step <= 0:
        raise ValueError(
            f"rate must be > 0 in '{giver.tag.name}' units, got {rate} -> {step}."
        )
    return step


def simulate_flow(
    giver: Container,
    receiver: Participant,
    steps: int,
    rate: float | None = None,
) -> dict[str, Any]:
    """Run *steps* transfers from *giver* to *receiver* and return traces.

    For each step the sequence is:
        1. Wrap the giver in a :class:`ProvideLimiter` when a rate is set.
        2. Negotiate and apply one transfer.
        3. Record the moved amount and both levels.

    Args:
        giver: Source container.
        receiver: Destination container or limiter.
        steps: Number of steps to simulate (>= 1).
        rate: Optional per-step cap on the moved amount.  Must be > 0
            once converted to the giver's units.

    Returns:
        Dictionary containing:
            total_moved    -- Sum of all moved amounts.
            amounts        -- Amount moved at each step (list).
            giver_trace    -- Giver level after each step (list).
            receiver_trace -- Receiver level after each step (list).

    Raises:
        ValueError: If steps < 1 or rate is not > 0 in the giver's units.
    """
    if steps < 1:
        raise ValueError("steps must be >= 1.")
    step = None if rate is None else _step_rate(giver, rate)

    amounts: list[Any] = []
    giver_trace: list[Any] = []
    receiver_trace: list[Any] = []

    for _ in range(steps):
        # 1. Throttle
        source: Participant = giver if step is None else ProvideLimiter(giver, step)

        # 2. Transfer
        amounts.append(transfer(source, receiver))

        # 3. Record
        giver_trace.append(_level(giver))
        receiver_trace.append(_level(receiver))

    return {
        "total_moved": sum(amounts, giver.tag.units(0)),
        "amounts": amounts,
        "giver_trace": giver_trace,
        "receiver_trace": receiver_trace,
    }


def steps_to_drain(giver: Container, receiver: Container, rate: float) -> int:
    """Return how many rate-limited steps move everything that can move.

    Works on copies of the two levels, so neither container is mutated.

    Raises:
        ValueError: If rate is not > 0 in the giver's units.
    """
    step = _step_rate(giver, rate)
    movable = min(giver.get_request_units(), receiver.get_available_units())
    steps = 0
    while movable > 0:
        movable -= min(movable, step)
        steps += 1
    return steps


def flow_frame(result: dict[str, Any]) -> pd.DataFrame:
    """Convert :func:`simulate_flow` traces into a DataFrame indexed by step.

    Steps are numbered from 1.  Columns: ``amount``, ``giver_level``,
    ``receiver_level``.
    """
    frame = pd.DataFrame(
        {
            "amount": result["amounts"],
            "giver_level": result["giver_trace"],
            "receiver_level": result["receiver_trace"],
        }
    )
    frame.index = pd.RangeIndex(start=1, stop=len(frame) + 1, name="step")
    return frame
