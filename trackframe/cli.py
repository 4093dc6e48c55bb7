from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from .constants import DEFAULT_MAX_ACCURACY_M, DEFAULT_OUTPUT_PATH, SPLIT_GAP_KM, SPLIT_GAP_MINUTES
from .controller import FrameConfig, compute_frame
from .deckbuilder import build_frame_payload
from .io import load_points, resolve_input_path
from .segments import ConnectAll, SplitOnTimeOrDistance
from .stats import print_summary
from .time_utils import parse_date_string


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build map polylines, day markers and camera framing from location samples."
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="JSON file with a list of points (lat/lng/timestamp) or a Takeout Records.json.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=f"Where to write the frame payload (default: {DEFAULT_OUTPUT_PATH.name}).",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Single-day view of this local date (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--start-date",
        type=str,
        default=None,
        help="First day of a multi-day view (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--end-date",
        type=str,
        default=None,
        help="Last day of a multi-day view (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--select-index",
        type=int,
        default=None,
        help="Pan to the point at this index of the drawn track (after filtering and collapsing), as if picked from the timeline.",
    )
    parser.add_argument(
        "--max-accuracy",
        type=float,
        default=DEFAULT_MAX_ACCURACY_M,
        help=f"Drop points reported less accurate than this many metres (default: {DEFAULT_MAX_ACCURACY_M:.0f}).",
    )
    parser.add_argument(
        "--split-gaps",
        action="store_true",
        help="Break tracks at long pauses or jumps and draw the jumps as dashed gaps.",
    )
    parser.add_argument(
        "--gap-minutes",
        type=float,
        default=SPLIT_GAP_MINUTES,
        help=f"Pause that breaks a track with --split-gaps (default: {SPLIT_GAP_MINUTES:.0f}).",
    )
    parser.add_argument(
        "--gap-km",
        type=float,
        default=SPLIT_GAP_KM,
        help=f"Jump that breaks a track with --split-gaps (default: {SPLIT_GAP_KM:.0f}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details.")
    args = parser.parse_args(argv)
    if (args.start_date is None) != (args.end_date is None):
        parser.error("--start-date and --end-date must be given together")
    if args.date and args.start_date:
        parser.error("--date cannot be combined with a date range")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    input_path = resolve_input_path(args.input)
    try:
        points = load_points(input_path)
    except (KeyError, ValueError) as exc:
        raise SystemExit(f"Could not read location points from {input_path}: {exc}") from exc
    if not points:
        raise SystemExit("No location points found in the supplied file.")

    try:
        selected_date = parse_date_string(args.date) if args.date else None
        date_range = None
        if args.start_date:
            date_range = (parse_date_string(args.start_date), parse_date_string(args.end_date))
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if date_range and date_range[0] > date_range[1]:
        raise SystemExit("Start date must be on or before the end date.")

    policy = (
        SplitOnTimeOrDistance(max_gap_minutes=args.gap_minutes, max_gap_km=args.gap_km)
        if args.split_gaps
        else ConnectAll()
    )
    config = FrameConfig(max_accuracy_m=args.max_accuracy, policy=policy)

    print(f"Loaded {len(points)} points from {input_path}.")
    frame = compute_frame(points, selected_date=selected_date, date_range=date_range, config=config)
    if args.select_index is not None:
        shown = frame.points
        if not 0 <= args.select_index < len(shown):
            raise SystemExit(f"--select-index must be between 0 and {len(shown) - 1} for the drawn track.")
        frame = compute_frame(
            points,
            selected_date=selected_date,
            date_range=date_range,
            selected_point=shown[args.select_index],
            navigation=frame.navigation,
            config=config,
        )
    print_summary(frame)

    output_path = args.output if args.output is not None else DEFAULT_OUTPUT_PATH
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(build_frame_payload(frame), indent=2), encoding="utf-8")
    print(f"Saved frame payload to {output_path.resolve()}")
