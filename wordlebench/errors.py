"""
Error taxonomy.

  WordleError
    PuzzleError        - word construction and puzzle rules (recoverable)
    HarnessError       - harness configuration, persistence, integrity
    SelfComparison     - comparing a summary with itself
"""

from __future__ import annotations


class WordleError(Exception):
    """Base class for everything this package raises on purpose."""


# ---- puzzle side ----

class PuzzleError(WordleError):
    pass


class InvalidIndex(PuzzleError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"the index {index} does not correspond to a possible Wordle word")


class NotInWordlist(PuzzleError):
    def __init__(self, word: str):
        self.word = word
        super().__init__(f'the string "{word}" is not in the Wordle wordlist')


class OutOfGuesses(PuzzleError):
    def __init__(self):
        super().__init__("the puzzle has already evaluated six guesses")


class InvalidHardmodeGuess(PuzzleError):
    def __init__(self, guess: str = "", previous: str = ""):
        self.guess = guess
        self.previous = previous
        msg = "that guess does not follow hardmode rules"
        if guess and previous:
            msg += f" ({guess!r} ignores what {previous!r} revealed)"
        super().__init__(msg)


class AttemptsKeyUsed(PuzzleError):
    def __init__(self):
        super().__init__("this attempts key has already been unlocked")


# ---- harness side ----

class HarnessError(WordleError):
    pass


class NoStrategiesAdded(HarnessError):
    def __init__(self):
        super().__init__("no strategies have been added to the harness")


class NoWordsSelected(HarnessError):
    def __init__(self):
        super().__init__("test harness configured to run on 0 words")


class BaselineAlreadySet(HarnessError):
    def __init__(self):
        super().__init__("test harness already has a baseline")


class BaselineNotFound(HarnessError):
    def __init__(self, name: str, directory: str):
        self.name = name
        self.directory = directory
        super().__init__(f"no saved baseline named {name!r} in {directory}")


class BaselineRead(HarnessError):
    """A baseline file exists but could not be read or decoded."""


class SummaryWrite(HarnessError):
    """A summary could not be written to disk."""


class StrategyCheated(HarnessError):
    def __init__(self, strategy_name: str):
        self.strategy_name = strategy_name
        super().__init__(f"the strategy {strategy_name} cheated")


# ---- stats ----

class SelfComparison(WordleError):
    def __init__(self):
        super().__init__("cannot compare a strategy with itself")
