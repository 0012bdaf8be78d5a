"""
Main entry point for running a Word Cascade bench match.

Usage:
    python -m wordcascade.main config.yaml
    python -m wordcascade.main config.yaml --output results/run1.json --verbose
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .environment import WordBench, BenchmarkConfig


def load_config(config_path: str) -> BenchmarkConfig:
    """Load bench configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return BenchmarkConfig(**data)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Let an LLM play a Word Cascade match",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  max_turns: 40
  seconds_per_turn: 5
  dictionary_path: data/words.txt
  stats_path: results/stats.json
  session:
    initial_timer_seconds: 120
    seed: 42
  player:
    model: gpt-4o
    temperature: 0.7
        """
    )
    parser.add_argument(
        "config",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout and enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("results") / f"match_{timestamp}.json"

    try:
        bench = WordBench.create(config=config)
    except Exception as e:
        print(f"Error creating bench: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Config: {args.config}")
        print(f"Output: {output_path}")
        print()

    try:
        result = bench.run(verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nRun interrupted by user")
        bench.end_reason = "Interrupted by user"
        result = bench.get_result()

    bench.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    print()
    print("=== Match Summary ===")
    print(f"Total turns: {result.total_turns}")
    print(f"End reason: {result.end_reason}")
    print(f"Final score: {result.final_stats.final_score}")
    print(f"Highest level: {result.final_stats.highest_level_reached}")
    print(f"Words found: {len(result.final_stats.found_words)}")
    print(f"Duration: {result.duration_seconds:.2f}s")

    return 0


if __name__ == "__main__":
    sys.exit(main())
