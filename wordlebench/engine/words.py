"""
Validated handles into the guess word list.

A `Word` is just an index into the sorted guess list loaded by
`wordlebench.datasets.load_wordlists`. Construction is validated, so every
`Word` in existence names a real entry; equality, hashing and ordering all
compare the index, which is cheap and agrees with alphabetical order because
the list is sorted.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterator, List

from wordlebench.datasets import load_wordlists
from wordlebench.errors import InvalidIndex, NotInWordlist


def guess_list():
    """The sorted tuple of every legal guess."""
    return load_wordlists().guesses


@dataclass(frozen=True, order=True)
class Word:
    index: int

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise InvalidIndex(self.index)
        if not 0 <= self.index < len(guess_list()):
            raise InvalidIndex(self.index)

    @classmethod
    def from_index(cls, index: int) -> "Word":
        """
        Build a Word from its position in the guess list.

        Raises InvalidIndex if `index` is out of bounds.
        """
        return cls(index)

    @classmethod
    def from_text(cls, text: str) -> "Word":
        """
        Build a Word from its spelling (case-insensitive).

        Raises NotInWordlist if the guess list does not contain it.
        """
        guesses = guess_list()
        w = text.strip().lower()
        i = bisect_left(guesses, w)
        if i < len(guesses) and guesses[i] == w:
            return cls(i)
        raise NotInWordlist(text)

    @property
    def text(self) -> str:
        return guess_list()[self.index]

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Word({self.text!r})"

    def __len__(self) -> int:
        return len(self.text)

    def __iter__(self) -> Iterator[str]:
        return iter(self.text)

    def __getitem__(self, i):
        return self.text[i]


def answers() -> List[Word]:
    """Every possible puzzle answer, in list order."""
    return [Word(i) for i in load_wordlists().answers]
