"""
Standalone CLI for printing a saved leaderboard.

Usage:
    python -m src.scores scores.json
    python -m src.scores scores.json --mode TIMED
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

from .environment import JsonLeaderboard


def format_table(entries, show_level: bool) -> str:
    """Render leaderboard entries as a fixed-width table."""
    if not entries:
        return "  (no scores yet)"

    lines = []
    for rank, entry in enumerate(entries, start=1):
        when = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        line = f"{rank:>3}. {entry.score:>7}  {entry.best_word or '-':<10} {when}"
        if show_level and entry.level is not None:
            line += f"  L{entry.level}"
        lines.append(line)
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Show a Wordfall leaderboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.scores scores.json
  python -m src.scores scores.json --mode TIMED
        """
    )
    parser.add_argument(
        "leaderboard",
        help="Path to the leaderboard JSON file"
    )
    parser.add_argument(
        "--mode", "-m",
        choices=["CASUAL", "TIMED"],
        help="Only show one mode (default: both)"
    )

    args = parser.parse_args()

    path = Path(args.leaderboard)
    if not path.exists():
        print(f"Error: Leaderboard file not found: {args.leaderboard}", file=sys.stderr)
        sys.exit(1)

    board = JsonLeaderboard(path)
    modes = [args.mode] if args.mode else ["CASUAL", "TIMED"]
    for mode in modes:
        print(f"=== {mode} ===")
        print(format_table(board.get(mode), show_level=mode == "TIMED"))
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
