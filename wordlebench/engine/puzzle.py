"""
Puzzle state machine and the guess ledger strategies fill in.

- `Attempts`     : append-only list of at most six guesses, tagged with the
                   `hard` / `cheat` flags it was created with.
- `AttemptsKey`  : single-use token the harness hands to `Strategy.solve`;
                   unlocking a harness-issued key is the only way to get an
                   untagged ledger.
- `Puzzle`       : owns the hidden answer and grades guesses through `check`.

Ledgers and keys built through their public constructors carry `cheat=True`.
A puzzle is poisoned (permanently) when it is checked with a cheat ledger or
with any ledger other than the one its own key unlocked; the harness treats a
poisoned puzzle as a strategy that cheated.
"""

from __future__ import annotations

import threading
from typing import Iterator, List, Optional, Tuple

from wordlebench.config import MAX_GUESSES
from wordlebench.errors import AttemptsKeyUsed, OutOfGuesses
from .hardmode import validate_hardmode
from .scoring import Grades, grade
from .words import Word


class Attempts:
    """
    The guesses made against one puzzle.

    Strategies must return the ledger they unlocked from their key; it is
    only ever written to by `Puzzle.check`. Constructed directly, a ledger is
    marked as a cheat ledger.
    """

    __slots__ = ("_inner", "_hard", "_cheat")

    def __init__(self, hard: bool = False):
        self._inner: List[Word] = []
        self._hard = bool(hard)
        self._cheat = True

    @classmethod
    def cheat(cls, hard: bool = False) -> "Attempts":
        """
        A ledger for use outside of `Strategy.solve` (tests, notebooks).

        Using it against a puzzle poisons that puzzle.
        """
        return cls(hard)

    @classmethod
    def _unflagged(cls, hard: bool) -> "Attempts":
        # only AttemptsKey.unlock calls this
        attempts = cls(hard)
        attempts._cheat = False
        return attempts

    @property
    def hard(self) -> bool:
        return self._hard

    @property
    def is_cheat(self) -> bool:
        return self._cheat

    def _push(self, word: Word) -> int:
        if len(self._inner) >= MAX_GUESSES:
            raise OutOfGuesses()
        self._inner.append(word)
        return len(self._inner) - 1

    @property
    def inner(self) -> Tuple[Word, ...]:
        return tuple(self._inner)

    def finished(self) -> bool:
        """True once six guesses have been recorded."""
        return len(self._inner) >= MAX_GUESSES

    def solved(self, word: Word) -> bool:
        """True if the last guess is `word`."""
        return bool(self._inner) and self._inner[-1] == word

    def __len__(self) -> int:
        return len(self._inner)

    def __iter__(self) -> Iterator[Word]:
        return iter(tuple(self._inner))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Attempts):
            return NotImplemented
        return (self._inner, self._hard, self._cheat) == (other._inner, other._hard, other._cheat)

    __hash__ = None

    def __str__(self) -> str:
        return "\n".join(w.text for w in self._inner)

    def __repr__(self) -> str:
        words = ", ".join(w.text for w in self._inner)
        return f"Attempts([{words}], hard={self._hard}, cheat={self._cheat})"


class AttemptsKey:
    """
    One-time permission to create a ledger for one puzzle.

    The harness issues a fresh key for every (strategy, word) trial, bound to
    that trial's puzzle. A key built with the public constructor is not bound
    to anything and unlocks a cheat ledger.
    """

    def __init__(self, hard: bool = False):
        self._hard = bool(hard)
        self._cheat = True
        self._puzzle: Optional["Puzzle"] = None
        self._ledger: Optional[Attempts] = None
        self._used = False
        self._lock = threading.Lock()

    @classmethod
    def cheat(cls, hard: bool = False) -> "AttemptsKey":
        """A key for running a strategy by hand; its ledger poisons the puzzle."""
        return cls(hard)

    @classmethod
    def _issue(cls, puzzle: "Puzzle", hard: bool) -> "AttemptsKey":
        """Harness-only: a key whose ledger `puzzle` will accept."""
        key = cls(hard)
        key._cheat = False
        key._puzzle = puzzle
        return key

    @property
    def hard(self) -> bool:
        return self._hard

    def unlock(self) -> Attempts:
        """Produce the ledger. A key can only be unlocked once."""
        with self._lock:
            if self._used:
                raise AttemptsKeyUsed()
            self._used = True
            if self._cheat:
                ledger = Attempts.cheat(self._hard)
            else:
                ledger = Attempts._unflagged(self._hard)
                self._puzzle._ledger = ledger
            self._ledger = ledger
        return ledger


class Puzzle:
    """
    A single Wordle puzzle with a hidden answer.

    `check(guess, attempts)`:
      1. a cheat ledger, or any ledger not unlocked from this puzzle's own
         key, poisons the puzzle (the guess is still graded);
      2. a hardmode ledger must satisfy every earlier guess's constraints,
         otherwise InvalidHardmodeGuess and nothing is recorded;
      3. the guess is recorded (OutOfGuesses if the ledger is full);
      4. the guess is graded against the answer.
    """

    __slots__ = ("_answer", "_poisoned", "_ledger")

    def __init__(self, answer: Word):
        self._answer = answer
        self._poisoned = False
        self._ledger: Optional[Attempts] = None

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def check(self, guess: Word, attempts: Attempts) -> Tuple[Grades, bool]:
        if attempts.is_cheat or attempts is not self._ledger:
            self._poisoned = True

        if attempts.hard:
            for previous in reversed(attempts.inner):
                previous_grades, _ = grade(previous, self._answer)
                validate_hardmode(previous, previous_grades, guess)

        attempts._push(guess)

        return grade(guess, self._answer)

    def __repr__(self) -> str:
        # keep the answer out of logs and tracebacks
        return f"Puzzle(poisoned={self._poisoned})"
