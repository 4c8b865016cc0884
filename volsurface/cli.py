"""Command line entry point: stream option data and plot the volatility surfaces."""

from __future__ import annotations

import argparse
import asyncio
import queue
import sys
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from volsurface.models import DeribitDataPoint, OptionSide, RawDeribitOption
from volsurface.plot import State
from volsurface.websocket import listen_for_deribit_data


@dataclass(frozen=True)
class Args:
    """Which option sides to plot."""

    puts: bool = True
    calls: bool = True

    def validate(self) -> None:
        """Raise ValueError unless at least one side is enabled."""
        if not (self.puts or self.calls):
            raise ValueError("At least one of --puts and --calls must be true.")


def _bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise argparse.ArgumentTypeError(f"invalid value {text!r}: expected true or false")


def parse_args(argv: Sequence[str] | None = None) -> Args:
    """Parse ``--puts`` and ``--calls``, each taking ``true`` or ``false``."""
    parser = argparse.ArgumentParser(prog="volsurface")
    parser.add_argument("--puts", type=_bool, default=True, metavar="BOOL")
    parser.add_argument("--calls", type=_bool, default=True, metavar="BOOL")
    namespace = parser.parse_args(argv)
    return Args(puts=namespace.puts, calls=namespace.calls)


def points_for_side(
    raw_options: Iterable[RawDeribitOption],
    side: OptionSide,
    today: date | None = None,
) -> list[DeribitDataPoint]:
    """Surface points of the options on ``side``; undecodable names are skipped."""
    fulls = (raw.into_full() for raw in raw_options)
    return [
        option.into_data_point(today)
        for option in fulls
        if option is not None and option.side == side
    ]


def _listen(sink) -> None:
    try:
        asyncio.run(listen_for_deribit_data(sink))
    except Exception as error:  # reported like the stream task does, then the window stays up
        print(f"Error: {error}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the viewer until its window is closed."""
    args = parse_args(argv)
    try:
        args.validate()
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    from volsurface.render import SurfaceView

    view = SurfaceView()
    batches: queue.Queue[list[RawDeribitOption]] = queue.Queue()
    threading.Thread(target=_listen, args=(batches.put,), daemon=True).start()

    sides = [side for side, on in ((OptionSide.CALL, args.calls), (OptionSide.PUT, args.puts)) if on]
    states = {side: State() for side in sides}

    while view.is_open:
        view.draw_axes()
        while True:
            try:
                raw_options = batches.get_nowait()
            except queue.Empty:
                break
            print(f"Number of raw options: {len(raw_options)}")
            for side in sides:
                states[side].update_state(points_for_side(raw_options, side))
                view.show_mesh(side, states[side].construct_mesh())
        view.refresh()
    return 0


if __name__ == "__main__":
    sys.exit(main())