#!/usr/bin/env python3
"""
Volcano Dungeon Predictor - Command Line Interface

CLI for predicting Stardew Valley Volcano Dungeon layouts and loot from a
save's seed and day, and for checking the System.Random port.

Usage:
    python cli.py predict --seed 12345 --days 5 --max-luck-lvl 2
    python cli.py predict --settings save.json --json
    python cli.py floor --seed 12345 --days 5 --level 3 --layout 17
    python cli.py rng --seed 12345 --count 20

Tables are read from --data-dir, or the SDV_VOLCANO_DATA environment
variable when the flag is omitted.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sdv_volcano.data.tables import DungeonTables, TableDataError, default_data_dir
from sdv_volcano.prediction.dungeon_predictor import DungeonPredictor, FloorReport
from sdv_volcano.state.rng import INT32_MAX, INT32_MIN, DotnetRandom
from sdv_volcano.state.settings import GameSettings, display_luck, load_settings


logger = logging.getLogger("VolcanoCLI")


# =============================================================================
# SETUP
# =============================================================================

def settings_from_args(args) -> GameSettings:
    """Build GameSettings from --settings FILE or the individual flags."""
    if args.settings:
        return load_settings(args.settings)
    return GameSettings(
        seed=args.seed,
        legacy_rng=args.legacy_rng,
        has_caldera=args.caldera,
        post_1_6_4=args.post_1_6_4,
        cracked_golden_coconut=args.cracked_coconut,
        special_charm=args.special_charm,
        days_played=args.days,
        max_luck_lvl=args.max_luck_lvl,
    )


def tables_from_args(args) -> DungeonTables:
    data_dir = args.data_dir or default_data_dir()
    if not data_dir:
        raise FileNotFoundError("No table directory: pass --data-dir or set SDV_VOLCANO_DATA")
    return DungeonTables.load(data_dir)


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_floor_report(report: FloorReport) -> str:
    """Format a single floor for display."""
    lines = [f"Floor {report.level}, layout {report.layout_id}"
             + (" (flipped)" if report.flip_x else "")]
    lines.append(report.ascii_map)
    lines.append("")

    for note in report.notes:
        lines.append(note)
    if report.notes:
        lines.append("")

    lines.append("Loot:")
    for interval in report.loot:
        if len(report.loot) > 1:
            lines.append(
                f"  luck {display_luck(interval.min_luck):.4f} to "
                f"{display_luck(interval.max_luck):.4f}:"
            )
        if not interval.value:
            lines.append("    [nothing]")
        for goodie in interval.value:
            lines.append(f"    {goodie}")
    return "\n".join(lines)


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_predict(args) -> int:
    """Predict layouts and loot for every floor."""
    settings = settings_from_args(args)
    predictor = DungeonPredictor(tables_from_args(args), settings)

    if args.json:
        print(json.dumps(predictor.predict().to_dict(), indent=2))
    else:
        print(predictor.summary())
    return 0


def cmd_floor(args) -> int:
    """Simulate a single floor with a chosen layout."""
    settings = settings_from_args(args)
    predictor = DungeonPredictor(tables_from_args(args), settings)
    report = predictor.floor(args.level, args.layout)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(format_floor_report(report))
    return 0


def cmd_rng(args) -> int:
    """Display the raw System.Random sequence for a seed."""
    if not INT32_MIN <= args.seed <= INT32_MAX:
        raise ValueError(f"seed {args.seed} does not fit in a signed 32-bit int")
    rng = DotnetRandom(args.seed)
    values: List[int] = [rng.next() for _ in range(args.count)]

    if args.json:
        data: Dict[str, Any] = {"seed": args.seed, "next": values}
        print(json.dumps(data, indent=2))
        return 0

    print(f"Seed: {args.seed}")
    print(f"First {args.count} Next() values:")
    for i, value in enumerate(values):
        print(f"  {i}: {value}")
    return 0


# =============================================================================
# MAIN
# =============================================================================

def add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    """Settings flags shared by predict and floor."""
    parser.add_argument("--settings", help="JSON settings file (overrides the flags below)")
    parser.add_argument("--seed", "-s", type=int, default=0, help="Save's unique game seed")
    parser.add_argument("--legacy-rng", action="store_true", help="Use legacy random seeding")
    parser.add_argument("--caldera", action="store_true", help="Caldera has been visited")
    parser.add_argument("--post-1-6-4", action="store_true", help="Game version 1.6.4 or later")
    parser.add_argument("--cracked-coconut", action="store_true",
                        help="A Golden Coconut has been cracked")
    parser.add_argument("--special-charm", action="store_true", help="Player has the Special Charm")
    parser.add_argument("--days", type=int, default=1, help="Days played (1 = spring 1, Y1)")
    parser.add_argument("--max-luck-lvl", type=int, default=0,
                        help="Highest luck level from buffs to consider")
    parser.add_argument("--data-dir", help="Directory with layouts.bin and set_pieces.json")
    parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Stardew Valley Volcano Dungeon predictor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s predict --seed 12345 --days 5
  %(prog)s predict --seed 12345 --days 5 --max-luck-lvl 2 --special-charm
  %(prog)s floor --seed 12345 --days 5 --level 3 --layout 17
  %(prog)s rng --seed 12345 --count 20
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Predict command
    predict_parser = subparsers.add_parser("predict", help="Predict every floor's layout and loot")
    add_settings_arguments(predict_parser)

    # Floor command
    floor_parser = subparsers.add_parser("floor", help="Simulate one floor with a given layout")
    add_settings_arguments(floor_parser)
    floor_parser.add_argument("--level", type=int, required=True, help="Floor index (0-9)")
    floor_parser.add_argument("--layout", type=int, required=True, help="Layout id")

    # RNG command
    rng_parser = subparsers.add_parser("rng", help="Show a System.Random sequence")
    rng_parser.add_argument("--seed", "-s", type=int, required=True, help="Generator seed")
    rng_parser.add_argument("--count", "-n", type=int, default=20, help="Number of values to show")
    rng_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch to command handler
    commands = {
        "predict": cmd_predict,
        "floor": cmd_floor,
        "rng": cmd_rng,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args)
    except (TableDataError, ValueError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
