import pytest

from prefix_tree.autocomplete import AmbiguousPrefixError, Autocompleter, UnknownNameError
from prefix_tree.trie import Trie


def test_suggest_shortest_first():
    t = Trie(["apple", "app", "apricot", "ap", "banana"])
    ac = Autocompleter(t)

    assert ac.suggest("ap") == ["ap", "app", "apple", "apricot"]
    assert ac.suggest("ap", limit=2) == ["ap", "app"]
    assert ac.suggest("b") == ["banana"]
    assert ac.suggest("z") == []


def test_suggest_rejects_non_positive_limit():
    ac = Autocompleter(Trie(["a"]))

    with pytest.raises(ValueError):
        ac.suggest("a", limit=0)


def test_suggest_sees_later_changes():
    t = Trie(["car"])
    ac = Autocompleter(t)
    t.insert("cab")
    t.remove("car")

    assert ac.suggest("ca") == ["cab"]


def test_resolve():
    ac = Autocompleter(Trie(["help", "history", "car", "cart", "quit"]))

    assert ac.resolve("q") == "quit"
    assert ac.resolve("he") == "help"
    assert ac.resolve("car") == "car"
    assert ac.resolve("cart") == "cart"


def test_resolve_unknown():
    ac = Autocompleter(Trie(["help"]))

    with pytest.raises(UnknownNameError):
        ac.resolve("x")
    with pytest.raises(LookupError):
        ac.resolve("helpme")


def test_resolve_ambiguous_lists_candidates():
    ac = Autocompleter(Trie(["help", "history", "hide"]))

    with pytest.raises(AmbiguousPrefixError) as excinfo:
        ac.resolve("h")
    assert excinfo.value.candidates == ["help", "hide", "history"]
    assert excinfo.value.name == "h"


def test_suggest_keeps_closest_matches_from_large_vocabulary():
    words = ["a" + str(i) for i in range(1000)] + ["ab", "aa"]
    ac = Autocompleter(Trie(words))

    assert ac.suggest("a", limit=4) == ["a0", "a1", "a2", "a3"]
    assert ac.suggest("a", limit=12)[-3:] == ["a9", "aa", "ab"]
    assert len(ac.suggest("a", limit=5000)) == 1002
