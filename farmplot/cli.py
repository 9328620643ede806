"""Run a boundary selection session from the command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional, Sequence

from farmplot.config import get_settings
from farmplot.flows.selection import BoundarySelectionController, SessionSnapshot
from farmplot.models import AnalysisStep, GeoPoint
from farmplot.timing import AsyncioScheduler, ManualScheduler


def parse_point(raw: str) -> GeoPoint:
    try:
        lat_text, lon_text = raw.split(",")
        latitude = float(lat_text)
        longitude = float(lon_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected LAT,LON, got {raw!r}") from exc
    if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
        raise argparse.ArgumentTypeError(f"coordinates out of range: {raw!r}")
    return GeoPoint(latitude=latitude, longitude=longitude)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="farmplot", description="Compute a farm boundary area and run the analysis steps."
    )
    parser.add_argument(
        "--point",
        dest="points",
        action="append",
        type=parse_point,
        required=True,
        help="Boundary corner as LAT,LON; pass exactly four times in tap order",
    )
    parser.add_argument(
        "--instant",
        action="store_true",
        help="Skip real waiting by driving the timers from a virtual clock",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _drive(
    controller: BoundarySelectionController, points: Sequence[GeoPoint]
) -> SessionSnapshot:
    controller.mark_centered()
    controller.begin_selection()
    for point in points:
        controller.add_point(point)
    return controller.snapshot()


def _summary(snapshot: SessionSnapshot) -> dict:
    return {
        "status": snapshot.status.value,
        "areaAcres": snapshot.area_acres,
        "boundary": [
            {
                "latitude": p.latitude,
                "longitude": p.longitude,
                "sequenceIndex": p.sequence_index,
            }
            for p in snapshot.boundary or ()
        ],
        "nextScreen": get_settings().next_screen,
    }


async def _run_async(points: Sequence[GeoPoint], *, quiet: bool) -> SessionSnapshot:
    done = asyncio.Event()
    controller = BoundarySelectionController(
        scheduler=AsyncioScheduler(),
        on_complete=done.set,
        on_step=None if quiet else _print_step,
    )
    try:
        _drive(controller, points)
        await done.wait()
        return controller.snapshot()
    finally:
        if not done.is_set():
            controller.teardown()


def _run_instant(points: Sequence[GeoPoint], *, quiet: bool) -> SessionSnapshot:
    scheduler = ManualScheduler()
    controller = BoundarySelectionController(
        scheduler=scheduler, on_step=None if quiet else _print_step
    )
    _drive(controller, points)
    scheduler.run_all()
    return controller.snapshot()


def _print_step(index: int, step: AnalysisStep) -> None:
    print(f"[{index + 1}] {step.title}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    if len(args.points) != 4:
        parser.error(f"exactly 4 --point values are required, got {len(args.points)}")

    if args.instant:
        snapshot = _run_instant(args.points, quiet=args.json)
    else:
        snapshot = asyncio.run(_run_async(args.points, quiet=args.json))

    summary = _summary(snapshot)
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"Area: {snapshot.area_acres:.3f} acres")
        print(f"Status: {summary['status']} -> {summary['nextScreen']}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
