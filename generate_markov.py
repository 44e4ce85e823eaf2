from __future__ import annotations
import argparse
import os
import random
import sys
from typing import Iterable, Iterator, List

from markov import (
    DEFAULT_LENGTH,
    InputDirectoryUnreadable,
    NoUsableInput,
    Tokenizer,
    build_chain,
)

__version__ = "0.1.0"

def list_training_files(path: str) -> List[str]:
    """Regular files directly inside `path`, sorted by name."""
    try:
        with os.scandir(path) as entries:
            files = []
            for entry in entries:
                try:
                    if entry.is_file(follow_symlinks=False):
                        files.append(entry.path)
                except OSError:
                    continue
    except OSError as e:
        raise InputDirectoryUnreadable(f"Can't read files from: {path!r} ({e})") from e
    return sorted(files)

def read_texts(paths: Iterable[str], verbose: bool = False) -> Iterator[str]:
    for p in paths:
        try:
            with open(p, "r", encoding="utf-8") as f:
                yield f.read()
        except (OSError, UnicodeDecodeError) as e:
            if verbose:
                print(f"Warning: skipping {p}: {e}", file=sys.stderr)

def main(argv=None):
    ap = argparse.ArgumentParser(description="Generate random text from a word-level Markov chain.")
    ap.add_argument("training_path", help="Directory that contains the training texts")
    ap.add_argument("--length", type=int, default=DEFAULT_LENGTH, help="Number of words to generate")
    ap.add_argument("--rng-seed", type=int, default=None, help="Seed for reproducible output")
    ap.add_argument("--verbose", action="store_true", help="Report skipped files on stderr")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = ap.parse_args(argv)

    if args.length < 0:
        ap.error("--length must be >= 0")

    try:
        files = list_training_files(args.training_path)
        chain = build_chain(read_texts(files, verbose=args.verbose), Tokenizer())
    except InputDirectoryUnreadable as e:
        raise SystemExit(str(e))
    except NoUsableInput as e:
        raise SystemExit(f"{e} in {args.training_path!r}")

    rng = random.Random(args.rng_seed)
    print(chain.generate_text(args.length, rng))

if __name__ == "__main__":
    main()
