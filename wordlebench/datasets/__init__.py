from .validator import validate_wordlists, pretty_summary
from .io import read_words, write_words
from .wordlists import Wordlists, load_wordlists

__all__ = [
    "validate_wordlists", "pretty_summary", "read_words", "write_words",
    "Wordlists", "load_wordlists",
]
