from __future__ import annotations
import re
import random
from collections import Counter
from functools import reduce
from typing import Dict, Iterable, Iterator, List, Optional, Union

# Letters, digits, combining marks, (') and (-), optionally ending with any run of (.), (!) and (?).
WORD_PATTERN = r"[\w\u0300-\u036f\u1ab0-\u1aff\u1dc0-\u1dff\u20d0-\u20ff\ufe20-\ufe2f'-]+[.!?]*"

DEFAULT_LENGTH = 10

class _Start:
    __slots__ = ()

    def __repr__(self) -> str:
        return "START"

# Predecessor key for the first token of every text; never equal to a str token.
START = _Start()

Key = Union[str, _Start]

class MarkovError(Exception):
    """Base class for chain building and generation failures."""

class InputDirectoryUnreadable(MarkovError):
    pass

class NoUsableInput(MarkovError):
    pass

class GenerationDeadEnd(MarkovError, KeyError):
    def __init__(self, key: Key, step: int):
        self.key = key
        self.step = step
        super().__init__(f"no successors recorded for {key!r} at step {step}")

    def __str__(self) -> str:
        return self.args[0]

class Tokenizer:
    """
    Splits raw text into word tokens.

    Tokens are returned exactly as matched: no case folding and no stripping
    of trailing sentence punctuation.
    """
    def __init__(self, pattern: Union[str, re.Pattern] = WORD_PATTERN):
        self.pattern = re.compile(pattern)

    def tokens(self, text: str) -> Iterator[str]:
        return (m.group(0) for m in self.pattern.finditer(text))

    def __call__(self, text: str) -> List[str]:
        return list(self.tokens(text))

class SuccessorBag:
    """Every word seen after one predecessor, duplicates kept."""
    def __init__(self, items: Optional[Iterable[str]] = None):
        self.items: List[str] = list(items) if items is not None else []

    def add(self, token: str):
        self.items.append(token)

    def extend(self, other: "SuccessorBag"):
        self.items.extend(other.items)
        other.items = []

    def choice(self, rng: random.Random) -> str:
        # Drawing from the full list weights each word by its occurrence count.
        return rng.choice(self.items)

    def counts(self) -> Counter:
        return Counter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SuccessorBag):
            return NotImplemented
        return self.counts() == other.counts()

    def __repr__(self) -> str:
        return f"SuccessorBag({self.items!r})"

class MarkovChain:
    """
    First-order word chain.

    transitions: Dict[predecessor, SuccessorBag], where predecessor is a token
    or START. A key is only present once it has at least one successor.
    """
    def __init__(self):
        self.transitions: Dict[Key, SuccessorBag] = {}

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "MarkovChain":
        mc = cls()
        mc.add_tokens(tokens)
        return mc

    @classmethod
    def from_text(cls, text: str, tokenizer: Optional[Tokenizer] = None) -> "MarkovChain":
        tokenizer = tokenizer or Tokenizer()
        return cls.from_tokens(tokenizer.tokens(text))

    def add_tokens(self, tokens: Iterable[str]):
        prev: Key = START
        for tok in tokens:
            bag = self.transitions.get(prev)
            if bag is None:
                bag = self.transitions[prev] = SuccessorBag()
            bag.add(tok)
            prev = tok

    def merge(self, other: "MarkovChain") -> "MarkovChain":
        """
        Move every observation of `other` into this chain and return it.

        `other` is left empty afterwards.
        """
        if other is self:
            raise ValueError("cannot merge a chain into itself")
        for key, bag in other.transitions.items():
            mine = self.transitions.get(key)
            if mine is None:
                self.transitions[key] = bag
            else:
                mine.extend(bag)
        other.transitions = {}
        return self

    def keys(self):
        return self.transitions.keys()

    def __getitem__(self, key: Key) -> SuccessorBag:
        return self.transitions[key]

    def __contains__(self, key) -> bool:
        return key in self.transitions

    def __len__(self) -> int:
        return len(self.transitions)

    def generate_words(self, n_words: int = DEFAULT_LENGTH, rng: Optional[random.Random] = None) -> List[str]:
        if n_words < 0:
            raise ValueError("n_words must be >= 0")
        rng = rng or random.Random()
        out: List[str] = []
        current: Key = START
        for step in range(n_words):
            bag = self.transitions.get(current)
            if not bag:
                raise GenerationDeadEnd(current, step)
            current = bag.choice(rng)
            out.append(current)
        return out

    def generate_text(self, n_words: int = DEFAULT_LENGTH, rng: Optional[random.Random] = None) -> str:
        return " ".join(self.generate_words(n_words, rng))

def merge_chains(chains: Iterable[MarkovChain]) -> MarkovChain:
    it = iter(chains)
    try:
        first = next(it)
    except StopIteration:
        raise NoUsableInput("No chain to generate from: no usable input texts") from None
    return reduce(MarkovChain.merge, it, first)

def build_chain(texts: Iterable[str], tokenizer: Optional[Tokenizer] = None) -> MarkovChain:
    tokenizer = tokenizer or Tokenizer()
    return merge_chains(MarkovChain.from_text(t, tokenizer) for t in texts)
