import pytest
from wordlebench.engine import AttemptsKey, Puzzle, Word, answers, guess_list
from wordlebench.errors import InvalidIndex, NotInWordlist, PuzzleError


def test_from_text_roundtrip_and_case():
    crane = Word.from_text("crane")
    assert crane.text == "crane"
    assert Word.from_text("  CRANE ") == crane
    assert str(crane) == "crane"
    assert repr(crane) == "Word('crane')"
    assert Word.from_index(crane.index) == crane


def test_from_index_bounds():
    assert Word.from_index(0).text == guess_list()[0]
    last = len(guess_list()) - 1
    assert Word.from_index(last).text == guess_list()[-1]
    for bad in (-1, last + 1):
        with pytest.raises(InvalidIndex) as e:
            Word.from_index(bad)
        assert e.value.index == bad


@pytest.mark.parametrize("text", ["zzzzz", "cranes", "", "12345"])
def test_from_text_rejects_unknown(text):
    with pytest.raises(NotInWordlist) as e:
        Word.from_text(text)
    assert e.value.word == text
    assert isinstance(e.value, PuzzleError)


def test_ordering_is_alphabetical():
    a, b = Word.from_text("aback"), Word.from_text("zonal")
    assert a < b
    assert sorted([b, a]) == [a, b]
    assert len({a, Word.from_text("aback")}) == 1


def test_letters():
    crane = Word.from_text("crane")
    assert len(crane) == 5
    assert list(crane) == list("crane")
    assert crane[2] == "a"


def test_answers_are_guessable():
    pool = answers()
    assert len(pool) == 2309
    assert all(0 <= x.index < len(guess_list()) for x in pool)
    assert Word.from_text("crane") in pool
    # extra guesses are not answers
    assert Word.from_text("aahed") not in pool


@pytest.mark.parametrize("bad", [-1, 10 ** 6, True, "3"])
def test_constructor_checks_bounds(bad):
    with pytest.raises(InvalidIndex):
        Word(bad)


def test_out_of_range_word_never_reaches_a_puzzle():
    puzzle = Puzzle(Word.from_text("crane"))
    attempts = AttemptsKey._issue(puzzle, False).unlock()
    with pytest.raises(InvalidIndex):
        puzzle.check(Word(len(guess_list())), attempts)
    assert len(attempts) == 0
