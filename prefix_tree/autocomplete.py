"""Autocomplete and name resolution on top of the public Trie API."""

import heapq
import itertools
from typing import List

from prefix_tree.trie import Trie

DEFAULT_LIMIT = 10


class UnknownNameError(LookupError):
    """No stored key starts with the requested name."""


class AmbiguousPrefixError(LookupError):
    """Several stored keys start with the requested name."""

    def __init__(self, name: str, candidates: List[str]) -> None:
        super().__init__(f"{name!r} is ambiguous: {', '.join(candidates)}")
        self.name = name
        self.candidates = candidates


class Autocompleter:
    """
    Suggests completions for a prefix.

    Suggestions are ordered shortest first, then alphabetically, so a
    bounded request keeps the closest completions.
    """

    def __init__(self, trie: Trie) -> None:
        """
        Args:
            trie: The trie holding the vocabulary. It is read, never mutated.
        """
        self.trie = trie

    def suggest(self, prefix: str, limit: int = DEFAULT_LIMIT) -> List[str]:
        """
        Return up to ``limit`` stored keys starting with ``prefix``.

        Args:
            prefix: Text typed so far.
            limit: Maximum number of suggestions, must be positive.

        Returns:
            A list of keys, shortest first.

        Raises:
            ValueError: If limit is not positive.
        """
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        return heapq.nsmallest(limit, self.trie.iter_keys(prefix), key=lambda k: (len(k), k))

    def resolve(self, name: str) -> str:
        """
        Expand an abbreviated name to the single stored key it stands for.

        An exact match always wins, so ``"car"`` resolves to itself even
        when ``"cart"`` is stored too.

        Raises:
            UnknownNameError: If nothing starts with ``name``.
            AmbiguousPrefixError: If several keys start with ``name``.
        """
        if self.trie.contains(name):
            return name
        # two candidates are enough to know the prefix is ambiguous
        candidates = list(itertools.islice(self.trie.iter_keys(name), 2))
        if not candidates:
            raise UnknownNameError(name)
        if len(candidates) > 1:
            raise AmbiguousPrefixError(name, self.suggest(name))
        return candidates[0]
