"""Tests for stepped flow simulation and trace export."""

import pandas as pd
import pytest

from vessel.core.container import Container, Properties, State
from vessel.core.flow import flow_frame, simulate_flow, steps_to_drain
from vessel.core.limiters import ConsumeLimiter, ProvideLimiter
from vessel.core.units import ResourceTag

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

CAPACITY = 255.0
CRATES = ResourceTag(name="crates", units_type=int)


def _pair() -> tuple[Container, Container]:
    giver = Container(Properties(capacity=CAPACITY))
    receiver = Container(Properties(capacity=CAPACITY))
    receiver.load_state(State(fill_level=0.0))
    return giver, receiver


def _crate_pair() -> tuple[Container, Container]:
    depot = Container(Properties(capacity=12), CRATES)
    truck = Container(Properties(capacity=12), CRATES)
    truck.load_state(State(fill_level=0))
    return depot, truck


# ---------------------------------------------------------------------------
# simulate_flow
# ---------------------------------------------------------------------------


def test_flow_trace_lengths() -> None:
    """All trace lists must have one entry per step."""
    giver, receiver = _pair()
    result = simulate_flow(giver, receiver, steps=6, rate=10.0)
    assert len(result["amounts"]) == 6
    assert len(result["giver_trace"]) == 6
    assert len(result["receiver_trace"]) == 6


def test_flow_rate_limited_halves() -> None:
    """Two steps at half capacity drain the giver into the receiver."""
    giver, receiver = _pair()
    result = simulate_flow(giver, receiver, steps=2, rate=CAPACITY * 0.5)
    assert result["amounts"] == [127.5, 127.5]
    assert result["giver_trace"] == [127.5, 0.0]
    assert result["receiver_trace"] == [127.5, 255.0]
    assert result["total_moved"] == CAPACITY


def test_flow_unlimited_second_step_noop() -> None:
    """Without a rate the first step moves everything and later steps nothing."""
    giver, receiver = _pair()
    result = simulate_flow(giver, receiver, steps=3)
    assert result["amounts"] == [CAPACITY, 0.0, 0.0]
    assert giver.get_request_units() == 0.0
    assert receiver.get_request_units() == CAPACITY


def test_flow_conserves_total() -> None:
    """Giver plus receiver level is constant at every step."""
    giver, receiver = _pair()
    giver.load_state(State(fill_level=200.0))
    result = simulate_flow(giver, receiver, steps=10, rate=33.0)
    for g, r in zip(result["giver_trace"], result["receiver_trace"]):
        assert g + r == pytest.approx(200.0)
    assert result["total_moved"] == pytest.approx(200.0)


def test_flow_into_consume_limiter_traces_true_level() -> None:
    """A limited receiver is traced by its container's real level."""
    giver, receiver = _pair()
    result = simulate_flow(giver, ConsumeLimiter(receiver, 50.0), steps=3)
    assert result["receiver_trace"] == [50.0, 100.0, 150.0]


def test_flow_invalid_steps() -> None:
    """simulate_flow must reject fewer than one step."""
    giver, receiver = _pair()
    with pytest.raises(ValueError):
        simulate_flow(giver, receiver, steps=0)


# ---------------------------------------------------------------------------
# steps_to_drain / flow_frame
# ---------------------------------------------------------------------------


def test_steps_to_drain_matches_simulation() -> None:
    """The predicted step count drains the giver in simulation."""
    giver, receiver = _pair()
    steps = steps_to_drain(giver, receiver, rate=40.0)
    assert steps == 7
    assert giver.get_request_units() == CAPACITY, "prediction must not mutate"

    simulate_flow(giver, receiver, steps=steps, rate=40.0)
    assert giver.get_request_units() == 0.0


def test_steps_to_drain_nothing_movable() -> None:
    """Zero steps are needed when the receiver is already full."""
    giver = Container(Properties(capacity=CAPACITY))
    receiver = Container(Properties(capacity=CAPACITY))
    assert steps_to_drain(giver, receiver, rate=1.0) == 0


def test_steps_to_drain_invalid_rate() -> None:
    """A non-positive rate can never drain anything."""
    giver, receiver = _pair()
    with pytest.raises(ValueError):
        steps_to_drain(giver, receiver, rate=0.0)


def test_flow_frame_shape() -> None:
    """flow_frame returns one row per step indexed from 1."""
    giver, receiver = _pair()
    frame = flow_frame(simulate_flow(giver, receiver, steps=4, rate=100.0))
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["amount", "giver_level", "receiver_level"]
    assert list(frame.index) == [1, 2, 3, 4]
    assert frame.index.name == "step"
    assert frame["amount"].tolist() == [100.0, 100.0, 55.0, 0.0]


# ---------------------------------------------------------------------------
# Rates in integer units / nested limiters
# ---------------------------------------------------------------------------


def test_steps_to_drain_fractional_rate_on_int_tag() -> None:
    """A rate that truncates to zero integer units is rejected."""
    depot, truck = _crate_pair()
    with pytest.raises(ValueError, match="crates"):
        steps_to_drain(depot, truck, rate=0.5)


def test_steps_to_drain_int_tag() -> None:
    """Integer-unit rates drain in whole steps."""
    depot, truck = _crate_pair()
    assert steps_to_drain(depot, truck, rate=5) == 3


def test_flow_fractional_rate_on_int_tag() -> None:
    """simulate_flow rejects a rate that would move nothing each step."""
    depot, truck = _crate_pair()
    with pytest.raises(ValueError, match="crates"):
        simulate_flow(depot, truck, steps=3, rate=0.5)
    assert depot.get_request_units() == 12
    assert truck.get_request_units() == 0


def test_flow_int_tag_rate_truncates() -> None:
    """A fractional rate above one moves whole units per step."""
    depot, truck = _crate_pair()
    result = simulate_flow(depot, truck, steps=3, rate=4.9)
    assert result["amounts"] == [4, 4, 4]
    assert result["total_moved"] == 12


def test_flow_nested_limiter_traces_true_level() -> None:
    """Nested limiters are unwrapped down to the container's real level."""
    giver, receiver = _pair()
    nested = ProvideLimiter(ProvideLimiter(receiver, 10.0), 10.0)
    result = simulate_flow(giver, nested, steps=1)
    assert result["receiver_trace"] == [CAPACITY]


class _Meter:
    """Minimal participant that is not a container or limiter."""

    def __init__(self, tag: ResourceTag) -> None:
        self.tag = tag
        self.level = 0.0

    def get_request_units(self) -> float:
        return self.level

    def get_available_units(self) -> float:
        return 1.0

    def adjust(self, delta: float) -> None:
        self.level += delta


def test_flow_into_plain_participant() -> None:
    """Traces fall back to the request of a participant without a container."""
    giver, _ = _pair()
    meter = _Meter(giver.tag)
    result = simulate_flow(giver, meter, steps=2)
    assert result["receiver_trace"] == [1.0, 2.0]
