"""Prefix tree (trie) with autocomplete helpers and a small lookup service."""

from prefix_tree.trie import InvalidKeyError, Trie
from prefix_tree.autocomplete import AmbiguousPrefixError, Autocompleter, UnknownNameError

__all__ = [
    "AmbiguousPrefixError",
    "Autocompleter",
    "InvalidKeyError",
    "Trie",
    "UnknownNameError",
]

__version__ = "0.1.0"
