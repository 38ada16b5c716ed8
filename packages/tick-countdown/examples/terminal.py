"""Terminal countdown -- a TextSurface redrawn in place once per second.

Demonstrates:
- create_countdown with an ISO 8601 target
- on_create / on_tick / on_end hooks
- compact and padded display options
- run_forever pacing, Ctrl-C cancels

Run: python -m examples.terminal [TARGET] [--compact] [--pad]
"""

import argparse
import sys
from datetime import datetime, timedelta

from tick_countdown import TextSurface, TimerEvent, create_countdown


def main() -> None:
    parser = argparse.ArgumentParser(description="Count down to a point in time.")
    default_target = (datetime.now() + timedelta(seconds=75)).isoformat(timespec="seconds")
    parser.add_argument("target", nargs="?", default=default_target)
    parser.add_argument("--compact", action="store_true")
    parser.add_argument("--pad", action="store_true")
    parser.add_argument("--allow-negative", action="store_true")
    args = parser.parse_args()

    surface = TextSurface()

    def on_create(event: TimerEvent) -> None:
        print(f"=== Counting down to {args.target} ===\n")

    def on_tick(event: TimerEvent) -> None:
        sys.stdout.write(f"\r\033[K{surface.text}")
        sys.stdout.flush()

    def on_end(event: TimerEvent) -> None:
        print(f"\r\033[K{surface.text}\n\nDone.")

    scheduler = create_countdown(
        args.target,
        surface=surface,
        options={
            "compact": args.compact,
            "pad_values": args.pad,
            "allow_negative": args.allow_negative,
            "on_create": on_create,
            "on_tick": on_tick,
            "on_end": on_end,
        },
    )
    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        scheduler.cancel()
        print("\nCanceled.")


if __name__ == "__main__":
    main()
