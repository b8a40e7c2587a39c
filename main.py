"""CLI entrypoint for the Vessel container flow model."""

from __future__ import annotations

import logging
import sys

from vessel import __version__
from vessel.config import load_containers
from vessel.core.container import Container, Properties, State
from vessel.core.flow import flow_frame, simulate_flow
from vessel.core.limiters import ProvideLimiter


def main() -> None:
    """Run a demonstration of the container transfer core."""
    logging.basicConfig(
        level=logging.INFO, format="%(levelname)s %(name)s: %(message)s"
    )

    print(f"Vessel Container Flow Model v{__version__}")
    print("=" * 56)

    # -- Load inventory -------------------------------------------------------
    containers = load_containers()
    print(f"\nInventory: {len(containers)} containers loaded")
    for name, container in containers.items():
        print(
            f"  {name:<14} {container.tag.name:<8} "
            f"{container.get_request_units():>8.2f} / {container.capacity:.2f}"
        )

    # -- Full transfer --------------------------------------------------------
    main_tank = containers["main_tank"]
    reserve = containers["reserve_tank"]
    reserve.receive_from(main_tank)
    print("\nFull transfer main_tank -> reserve_tank:")
    print(f"  main_tank    : {main_tank.get_request_units():.2f}")
    print(f"  reserve_tank : {reserve.get_request_units():.2f}")

    # -- Limited transfer -----------------------------------------------------
    main_tank.receive_from(ProvideLimiter(reserve, 100.0))
    reserve.give_to(main_tank)
    print("\nLimited refill (cap 100) then unlimited top-up:")
    print(f"  main_tank    : {main_tank.get_request_units():.2f}")
    print(f"  reserve_tank : {reserve.get_request_units():.2f}")

    # -- Stepped flow ---------------------------------------------------------
    pump_rate = 42.5
    source = Container(Properties(capacity=255.0))
    sink = Container(Properties(capacity=255.0))
    sink.load_state(State(fill_level=0.0))
    result = simulate_flow(source, sink, steps=8, rate=pump_rate)

    print(f"\nPumping at {pump_rate} units/step:\n")
    print(flow_frame(result).to_string())
    print(f"\nTotal moved: {result['total_moved']:.2f}")


if __name__ == "__main__":
    sys.exit(main() or 0)
