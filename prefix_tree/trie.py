import logging
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Missing:
    """Marker for a node that carries no value (distinct from ``None``)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


_MISSING: Any = _Missing()


class InvalidKeyError(TypeError):
    """Raised when a key is not a string (``None`` included)."""


class TrieNode:
    """
    A single node in the trie.

    Attributes:
        character (str | None):
            The character on the edge leading to this node; None for the root.
        children (dict[str, TrieNode]):
            Mapping from a character to the next TrieNode.
        is_end (bool):
            True if this node marks the end of an inserted key.
        value:
            Payload of the key ending here, or the missing marker.
    """
    __slots__ = ("character", "children", "is_end", "value")

    def __init__(self, character: Optional[str] = None):
        self.character = character
        self.children: Dict[str, "TrieNode"] = {}
        self.is_end = False
        self.value: Any = _MISSING

    def __repr__(self) -> str:
        return f"<TrieNode {self.character!r} end={self.is_end} children={sorted(self.children)}>"


class _Removal(NamedTuple):
    removed: bool
    prune: bool


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise InvalidKeyError(f"trie keys must be str, got {type(key).__name__}")
    return key


def _check_batch(keys: Any) -> List[str]:
    if keys is None or isinstance(keys, str):
        raise InvalidKeyError("expected an iterable of str keys")
    return [_check_key(k) for k in keys]


class Trie(Generic[T]):
    """
    A prefix tree mapping string keys to optional values.

    Supports insertion, exact and prefix lookups, deletion with pruning of
    nodes that no longer lead to a key, and prefix-bounded enumeration.
    Children are visited in sorted character order, so every enumeration
    is lexicographic.

    Not thread safe; wrap mutations in a lock when sharing an instance.
    """

    def __init__(self, source: Union[Mapping[str, T], Iterable[str], None] = None):
        """
        Initialize the trie, optionally pre-populated.

        Args:
            source: A mapping of key -> value, or an iterable of keys
                (inserted without values).
        """
        self.root: TrieNode = TrieNode()
        self._size = 0
        if source is not None:
            if isinstance(source, Mapping):
                self.update(source)
            else:
                self.insert_all(source)

    # -------------------------------------------------------------
    # Core Operations
    # -------------------------------------------------------------

    def insert(self, key: str, value: T = _MISSING) -> None:
        """
        Insert a key into the trie, overwriting the value of an existing key.

        Args:
            key (str): The key to insert. The empty string marks the root.
            value: Optional payload stored with the key.

        Raises:
            InvalidKeyError: If key is not a string.
        """
        node = self.root
        for ch in _check_key(key):
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = TrieNode(ch)
            node = child
        if not node.is_end:
            node.is_end = True
            self._size += 1
        node.value = value

    def insert_all(self, keys: Iterable[str]) -> None:
        """Insert every key of ``keys`` without a value."""
        for key in _check_batch(keys):
            self.insert(key)

    def update(self, mapping: Mapping[str, T]) -> None:
        """
        Insert every key/value pair of a mapping.

        Args:
            mapping: Keys to values. Later pairs win on duplicate keys.
        """
        if not isinstance(mapping, Mapping):
            raise InvalidKeyError("expected a mapping of str keys to values")
        _check_batch(mapping.keys())
        for key, value in mapping.items():
            self.insert(key, value)

    def contains(self, key: str) -> bool:
        """
        Determine whether a key was inserted.

        Args:
            key (str): The key to search for.

        Returns:
            bool: True if the key exists, False otherwise.
        """
        node = self._find_node(_check_key(key))
        return node is not None and node.is_end

    def starts_with(self, prefix: str) -> bool:
        """
        Check if any key in the trie begins with the given prefix.

        The empty prefix always resolves to the root and returns True.

        Args:
            prefix (str): The prefix to test.

        Returns:
            bool: True if the prefix path exists in the trie.
        """
        return self._find_node(_check_key(prefix)) is not None

    def contains_any(self, keys: Iterable[str]) -> bool:
        """True if at least one of ``keys`` is stored; stops at the first hit."""
        return any(self.contains(key) for key in _check_batch(keys))

    def contains_all(self, keys: Iterable[str]) -> bool:
        """True if every one of ``keys`` is stored."""
        return all(self.contains(key) for key in _check_batch(keys))

    # -------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------

    def remove(self, key: str) -> bool:
        """
        Delete a key from the trie and prune nodes left without purpose.

        Args:
            key (str): The key to delete.

        Returns:
            bool: True if the key was deleted,
                  False if the key was not present.
        """
        result = self._unmark(_check_key(key))
        if result.removed:
            logger.debug("removed key %r", key)
        return result.removed

    def _unmark(self, key: str) -> _Removal:
        path: List[TrieNode] = [self.root]
        node = self.root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return _Removal(False, False)
            path.append(node)

        if not node.is_end:
            return _Removal(False, False)
        node.is_end = False
        node.value = _MISSING
        self._size -= 1

        # Walk back up; each parent drops the child edge while the child
        # signals it can be pruned.
        result = _Removal(True, not node.children)
        for depth in range(len(key), 0, -1):
            if not result.prune:
                break
            parent = path[depth - 1]
            del parent.children[key[depth - 1]]
            result = _Removal(result.removed, not parent.children and not parent.is_end)
        return result

    def remove_all(self, keys: Iterable[str]) -> bool:
        """
        Remove each key independently.

        Returns:
            bool: True only if every key was present and removed.
        """
        results = [self.remove(key) for key in _check_batch(keys)]
        return all(results)

    def clear(self) -> None:
        """Drop every key, including one stored for the empty string."""
        self.root.children.clear()
        self.root.is_end = False
        self.root.value = _MISSING
        self._size = 0

    def is_empty(self) -> bool:
        """True if the root has no children."""
        return not self.root.children

    # -------------------------------------------------------------
    # Values
    # -------------------------------------------------------------

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        """
        Return the value stored for ``key``.

        Args:
            key (str): The key to look up.
            default: Returned when the key is absent or has no value.
        """
        node = self._find_node(_check_key(key))
        if node is None or not node.is_end or node.value is _MISSING:
            return default
        return node.value

    def set(self, key: str, value: T) -> bool:
        """
        Replace the value of an existing key without creating nodes.

        Returns:
            bool: True if the key exists and was updated, False otherwise.
        """
        node = self._find_node(_check_key(key))
        if node is None or not node.is_end:
            return False
        node.value = value
        return True

    # -------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------

    def iter_keys(self, prefix: str = "") -> Iterator[str]:
        """
        Yield every stored key that begins with ``prefix``.

        Keys come out in lexicographic order. Each call walks the tree
        afresh; mutating the trie while iterating is not supported.

        Yields:
            str: Next matching key.
        """
        return (key for key, _ in self._walk(_check_key(prefix)))

    def list_keys(self) -> List[str]:
        """Return all keys in the trie."""
        return list(self.iter_keys())

    def list_keys_matching(self, prefix: str) -> List[str]:
        """
        Retrieve all keys in the trie that share a given prefix.

        Args:
            prefix (str): The prefix to match.

        Returns:
            list[str]: All keys that begin with the prefix; empty when the
            prefix does not resolve.
        """
        return list(self.iter_keys(prefix))

    def items(self, prefix: str = "") -> Iterator[Tuple[str, T]]:
        """Yield ``(key, value)`` for matching keys that carry a value."""
        walk = self._walk(_check_key(prefix))
        return ((key, node.value) for key, node in walk if node.value is not _MISSING)

    # -------------------------------------------------------------
    # Python protocols
    # -------------------------------------------------------------

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[str]:
        return self.iter_keys()

    def __getitem__(self, key: str) -> T:
        node = self._find_node(_check_key(key))
        if node is None or not node.is_end or node.value is _MISSING:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: str, value: T) -> None:
        self.insert(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.list_keys()!r})"

    # -------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------

    def _find_node(self, key: str) -> Optional[TrieNode]:
        """Walk the trie following ``key``; return the landing node or None."""
        node = self.root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def _walk(self, prefix: str) -> Iterator[Tuple[str, TrieNode]]:
        start = self._find_node(prefix)
        if start is None:
            return
        # DFS with an explicit stack of (node, accumulated key)
        stack: List[Tuple[TrieNode, str]] = [(start, prefix)]
        while stack:
            node, acc = stack.pop()
            if node.is_end:
                yield acc, node
            for ch in sorted(node.children, reverse=True):
                stack.append((node.children[ch], acc + ch))

    def check_invariants(self) -> None:
        """
        Assert the structural invariants of the whole tree.

        Raises:
            AssertionError: On a childless non-end node, a value on a
                non-end node, an edge/character mismatch, or a wrong size.
        """
        assert self.root.character is None, "root must be a sentinel"
        count = 1 if self.root.is_end else 0
        stack = list(self.root.children.items())
        while stack:
            ch, node = stack.pop()
            assert node.character == ch, f"edge {ch!r} leads to node {node!r}"
            assert node.is_end or node.children, f"prunable node left behind: {node!r}"
            assert node.is_end or node.value is _MISSING, f"value on non-end node: {node!r}"
            count += node.is_end
            stack.extend(node.children.items())
        assert count == self._size, f"size {self._size} but {count} keys stored"
