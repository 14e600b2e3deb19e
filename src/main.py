"""
Main entry point for running headless Wordfall games.

Usage:
    python -m src.main config.yaml
    python -m src.main config.yaml --output results/run1.json --verbose
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .environment import AutoPlayer, GameConfig


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def main():
    parser = argparse.ArgumentParser(
        description="Play a headless Wordfall game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  mode: TIMED
  difficulty: HARD
  seed: 42
  max_moves: 100
  move_seconds: 2.5
  leaderboard_path: scores.json
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used if omitted)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.config:
        try:
            config = load_config(args.config)
        except Exception as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        config = GameConfig()

    # Determine output path
    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("results") / f"game_{timestamp}.json"

    player = AutoPlayer.create(config=config)
    if not player.session.ready:
        print(f"Error loading dictionary: {player.session.load_error}", file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        print(f"Config: {args.config or '(defaults)'}")
        print(f"Output: {output_path}")
        print()

    try:
        result = player.run(verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        player.session.end_game("Interrupted by user")
        result = player.get_result()

    # Save results
    player.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    # Print summary
    state = result.final_state
    print()
    print("=== Game Summary ===")
    print(f"Mode: {config.mode} ({config.difficulty})")
    print(f"Score: {state.score}")
    print(f"Words: {state.word_count}")
    print(f"Best word: {state.best_word or '-'}")
    print(f"Level: {state.level}")
    print(f"End reason: {result.end_reason}")
    if result.is_high_score:
        print("New high score!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
