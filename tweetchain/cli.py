"""
Command line front end.

    tweetchain train --seed NAME --input tweets.txt
    tweetchain generate --seed NAME --count 3

Chains are kept in the chain cache, keyed by seed user.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tweetchain.config import settings
from tweetchain.services.chain_cache import ChainCache
from tweetchain.services.errors import DeserializationError, GenerationError
from tweetchain.services.markov import ChainModel


def load_samples(path: Path) -> List[str]:
    """One sample per non-blank line."""
    with path.open("r", encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in f if line.strip()]


def cmd_train(args: argparse.Namespace) -> int:
    samples = load_samples(Path(args.input))
    print(f"Loaded {len(samples)} samples.")

    model = ChainModel()
    used = model.train(samples)
    if model.is_empty():
        print("No usable tokens in input, nothing stored.", file=sys.stderr)
        return 1

    path = ChainCache(args.cache_dir).store(args.seed, model)
    stats = model.get_stats()
    print(f"Trained chain for @{args.seed} on {used} samples ({stats.unique_tokens} tokens).")
    print(f"Chain saved to {path}")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    try:
        model = ChainCache(args.cache_dir).find(args.seed)
    except DeserializationError as e:
        print(f"Cached chain for @{args.seed} is corrupt: {e}", file=sys.stderr)
        return 1
    if model is None:
        print(f"No chain cached for @{args.seed}, run train first.", file=sys.stderr)
        return 1

    print(f"@{args.seed} Tweets...")
    try:
        for sentence in model.generate_many(args.count, max_steps=args.max_steps):
            print(sentence)
    except GenerationError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return 1
    return 0


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is negative")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tweetchain",
        description="Build Markov chains from tweets and generate fake ones.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--cache-dir", default=settings.CHAIN_CACHE_DIR,
                        help="Directory holding cached chains")
    sub = parser.add_subparsers(dest="command", required=True)

    train = sub.add_parser("train", parents=[common], help="Build and cache a chain from a text file")
    train.add_argument("--seed", required=True, help="Seed user the tweets belong to")
    train.add_argument("--input", required=True, help="Text file, one tweet per line")
    train.set_defaults(func=cmd_train)

    gen = sub.add_parser("generate", parents=[common], help="Generate sentences from a cached chain")
    gen.add_argument("--seed", required=True, help="Seed user to mimic")
    gen.add_argument("--count", type=int, default=1, help="Number of sentences")
    gen.add_argument("--max-steps", type=non_negative_int, default=None,
                     help="Step cap per sentence (0 disables, default from settings)")
    gen.set_defaults(func=cmd_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
