#!/usr/bin/env python3
"""Simple CLI runner for trying out relationships against a live directory."""

import sys

from herd.config import config
from herd.enums import CoupleMetric, DistanceUnit, Family
from herd.events import Event
from herd.exceptions import HerdException
from herd.logging import configure_logging, get_logger
from herd.relationship import Relationship
from herd.settings import RelationSettings
from spatial.directory import HerdDirectory, LiveHandle

logger = get_logger(__name__)


def print_event(event: Event):
    """Print events as they occur."""
    if event.type_name == "relationship.datum_updated":
        return
    print(f"  [{event.type_name}] {event.data}")


def print_snapshot(relationship: Relationship):
    snapshot = relationship.read()
    print(
        f"{snapshot.metric_name}: raw={snapshot.raw:.3f} normalized={snapshot.normalized:.3f} "
        f"curved={snapshot.curved:.3f} status={snapshot.status.value}"
    )


def build_demo() -> tuple[HerdDirectory, Relationship]:
    directory = HerdDirectory()
    directory.register(LiveHandle("A", position=(0.0, 0.0, 0.0)))
    directory.register(LiveHandle("B", position=(3.0, 0.0, 0.0)))

    relationship = Relationship(
        family=Family.COUPLE,
        metric=CoupleMetric.DISTANCE,
        members=["A", "B"],
        directory=directory,
        settings=RelationSettings(distance_unit=DistanceUnit.CENTIMETERS),
        minimum=0.0,
        maximum=500.0,
        description="Distance between A and B in centimeters",
    )
    relationship.on_all(print_event)
    return directory, relationship


def run_demo():
    """Walk member B away from A and watch the status change."""
    configure_logging(config.log_level)
    logger.info("demo.started")

    directory, relationship = build_demo()
    for x in (1.0, 3.0, 5.0, 7.0, 2.0):
        directory.get("B").position = (x, 0.0, 0.0)
        print(f"B at x={x}")
        print_snapshot(relationship)

    relationship.maximum = 200.0
    print("maximum lowered to 200")
    print_snapshot(relationship)

    logger.info("demo.complete")


def interactive_mode():
    """Run an interactive REPL over the demo relationship."""
    configure_logging(config.log_level)
    directory, relationship = build_demo()

    print("\nCommands:")
    print("  read             - Evaluate and print the relationship")
    print("  move <name> x y z - Move a member")
    print("  metric <value>   - Switch metric (e.g. couple.position)")
    print("  bounds <min> <max> - Set both bounds")
    print("  curve <type>     - Select a library curve (e.g. ease_in)")
    print("  quit             - Exit")
    print()

    while True:
        try:
            parts = input("> ").strip().split()
        except (EOFError, KeyboardInterrupt):
            break
        if not parts:
            continue

        command, args = parts[0].lower(), parts[1:]
        try:
            if command == "quit":
                break
            elif command == "read":
                print_snapshot(relationship)
            elif command == "move" and len(args) == 4:
                handle = directory.get(args[0])
                if handle is None:
                    print(f"Unknown member: {args[0]}")
                else:
                    handle.position = tuple(float(v) for v in args[1:])
            elif command == "metric" and len(args) == 1:
                relationship.metric = args[0]
            elif command == "bounds" and len(args) == 2:
                relationship.set_bounds(float(args[0]), float(args[1]))
            elif command == "curve" and len(args) == 1:
                relationship.curve = args[0]
            else:
                print(f"Unknown command: {' '.join(parts)}")
        except (ValueError, HerdException) as e:
            print(f"Error: {e}")


def main():
    """Main entry point."""
    if len(sys.argv) > 1 and sys.argv[1] == "--interactive":
        interactive_mode()
    else:
        run_demo()


if __name__ == "__main__":
    main()
