#!/usr/bin/env python3
"""
Wayfinder - Indoor turn-by-turn guide back to your parking spot

Usage:
    python -m wayfinder [layout.json] --from TOKEN --to TOKEN [options]

Options:
    --from TOKEN      Current location (node id or scanned code)
    --to TOKEN        Destination (node id or scanned code)
    --demo            Route from P4 to P15 on the bundled demo layout
    --strategy NAME   Direction style: turn_distance, turn_only or cardinal
    --threshold M     Off-path distance threshold in meters
    --playback FILE   Track positions from a recorded trace file
    --speed FACTOR    Playback speed multiplier (default: 1.0)
    --manual          Track positions typed as "x,y" lines on stdin
    --record FILE     Record tracked positions to a trace file
    --log FILE        Log file path (default: wayfinder_TIMESTAMP.log)
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

from .config import CONFIG
from .logger import Logger
from .layout import LayoutError, load_layout, load_demo_layout
from .graph import LayoutGraph
from .directions import STRATEGIES
from .positions import PositionPlayback, PositionRecorder, ManualPositionSource
from .app import Navigator


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Wayfinder - Indoor turn-by-turn guide back to your parking spot"
    )
    parser.add_argument("layout", nargs="?",
                        help="Layout JSON file (default: bundled demo layout)")
    parser.add_argument("--from", dest="start", metavar="TOKEN",
                        help="Current location (node id or scanned code)")
    parser.add_argument("--to", dest="destination", metavar="TOKEN",
                        help="Destination (node id or scanned code)")
    parser.add_argument("--demo", action="store_true",
                        help="Route between the demo spots on the bundled layout")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES),
                        default=CONFIG["direction_strategy"],
                        help="Direction style (default: %(default)s)")
    parser.add_argument("--threshold", type=float,
                        default=CONFIG["route_deviation_threshold"],
                        help="Off-path threshold in meters (default: %(default)s)")
    parser.add_argument("--playback", metavar="FILE",
                        help="Track positions from a recorded trace file")
    parser.add_argument("--speed", type=float, default=1.0,
                        help="Playback speed multiplier (default: 1.0)")
    parser.add_argument("--manual", action="store_true",
                        help="Track positions typed as 'x,y' lines on stdin")
    parser.add_argument("--record", metavar="FILE",
                        help="Record tracked positions to a trace file")
    parser.add_argument("--log", metavar="FILE",
                        help="Log file path (default: wayfinder_TIMESTAMP.log)")

    args = parser.parse_args(argv)

    if args.playback and args.manual:
        parser.error("--playback and --manual cannot be used together")
    if args.record and not (args.playback or args.manual):
        parser.error("--record requires --playback or --manual")

    if args.demo:
        args.start = args.start or CONFIG["demo_start"]
        args.destination = args.destination or CONFIG["demo_destination"]
    if not args.start or not args.destination:
        parser.error("--from and --to are required (or use --demo)")

    # Load layout
    try:
        layout = load_layout(args.layout) if args.layout else load_demo_layout()
    except LayoutError as e:
        print(e)
        return 1

    log_path = args.log
    if not log_path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = f"wayfinder_{timestamp}.log"
    with Logger(log_path, echo=False) as logger:
        graph = LayoutGraph.from_layout(layout, logger=logger)
        if graph.dropped_edges or graph.dropped_nodes:
            print(f"Warning: skipped {len(graph.dropped_nodes)} node and "
                  f"{len(graph.dropped_edges)} edge records in layout")

        navigator = Navigator(graph, logger=logger, threshold=args.threshold,
                              strategy=args.strategy)
        if navigator.set_destination(args.destination) is None:
            print(f"Unknown destination: {args.destination}")
            return 1
        if navigator.set_current_location(args.start) is None:
            print(f"Unknown location: {args.start}")
            return 1

        print(f"\n=== Wayfinder ===")
        print(f"From: {navigator.state.current.id}  To: {navigator.state.destination.id}")
        print(navigator.status_text())
        if not navigator.state.path:
            return 0

        cost = navigator.finder.path_cost(list(navigator.state.path))
        print(f"Route: {' -> '.join(n.id for n in navigator.state.path)} ({cost:.1f} {CONFIG['distance_unit']})")
        print()
        for i, instruction in enumerate(navigator.state.instructions, 1):
            print(f"  {i}. {instruction.text}")

        # Set up position source
        source = None
        if args.playback:
            if not Path(args.playback).exists():
                print(f"Playback file not found: {args.playback}")
                return 1
            try:
                source = PositionPlayback(args.playback, args.speed)
            except (KeyError, TypeError, ValueError, OSError) as e:
                print(f"Cannot read playback file {args.playback}: {e!r}")
                return 1
        elif args.manual:
            source = ManualPositionSource(sys.stdin, prompt=sys.stdin.isatty())
        if source is None:
            return 0
        if args.record:
            source = PositionRecorder(source, args.record)

        print()
        navigator.run(source)
        return 0


if __name__ == "__main__":
    sys.exit(main())
