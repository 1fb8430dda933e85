"""Prefix trie keyed by Unicode code points.

Keys are walked one code point at a time (iterating a ``str``). Every key
may carry an optional payload. The tree is kept compact: no branch is ever
left without children, and removing a key prunes the path above it back to
the nearest ancestor that is still a stored key or still has other
children.

Example:
    trie = Trie()
    trie.insert("this is more", 1)
    trie.insert("this is more words", 2)

    trie.longest_prefix("this is more wo", must_be_terminal=True)
    # -> "this is more"
    trie.longest_prefix("this is more wo")
    # -> "this is more wo"
"""

import logging
from dataclasses import dataclass
from typing import Optional, List, TypeVar, Generic, Iterator, Tuple

from .errors import KeyAlreadyExists
from .node import (
    Node,
    EmptyNode,
    LeafNode,
    BranchNode,
    promote,
    compact,
    iter_children,
)
from .render import render_tree

T = TypeVar('T')

log = logging.getLogger(__name__)


@dataclass
class PrefixMatch(Generic[T]):
    """Result of a prefix search.

    Attributes:
        prefix: The matched part of the query.
        node: Node reached at the end of prefix.
        is_terminal: Whether prefix is a stored key.
        full_match: Whether the whole query was consumed at node.
    """
    prefix: str
    node: Node
    is_terminal: bool
    full_match: bool


@dataclass
class RemovalOutcome:
    """What one level of a removal asks of the level above it.

    Attributes:
        removed: Whether a key (or subtree) was removed.
        prune: The parent must drop its entry for this node.
        replacement: The parent must store this node in place of the old one.
    """
    removed: bool = False
    prune: bool = False
    replacement: Optional[Node] = None


class Trie(Generic[T]):
    """Mutable prefix tree mapping strings to optional payloads.

    Supports:
    - Insert with duplicate rejection
    - Exact lookup and longest-prefix search, optionally restricted to
      stored keys
    - Removal of a single key or of a whole subtree
    - Deterministic rendering of the tree shape

    Not safe for concurrent mutation; callers serialize access.
    """

    def __init__(self):
        self._root: Node = EmptyNode()
        self._size = 0

    @property
    def root(self) -> Node:
        """Node for the empty key."""
        return self._root

    def insert(self, key: str, payload: Optional[T] = None) -> Node:
        """Store key with payload.

        Args:
            key: Key to store. The empty string addresses the root.
            payload: Value to associate with key.

        Returns:
            The node now holding key.

        Raises:
            KeyAlreadyExists: If key is already stored. The trie is left
                unchanged.
        """
        log.debug("insert %r", key)
        if not key:
            self._root = _terminate(self._root, key, payload)
            self._size += 1
            return self._root

        # Only childless nodes get promoted, so the key cannot already be
        # stored below a promotion and _terminate cannot raise after one.
        branch = promote(self._root)
        self._root = branch
        last = len(key) - 1
        for depth, ch in enumerate(key):
            child = branch.children.get(ch)
            if child is None:
                child = EmptyNode()
            if depth == last:
                node = _terminate(child, key, payload)
                branch.children[ch] = node
                break
            next_branch = promote(child)
            branch.children[ch] = next_branch
            branch = next_branch

        self._size += 1
        return node

    def contains_key(self, key: str) -> bool:
        """Check if key is stored."""
        return self.find(key, must_be_terminal=True) is not None

    def __contains__(self, key: str) -> bool:
        return self.contains_key(key)

    def find(self, key: str, must_be_terminal: bool = False) -> Optional[Node]:
        """Find the node for exactly key.

        Args:
            key: Key to look up; all of it must be consumed.
            must_be_terminal: Only accept a node where a stored key ends.

        Returns:
            The node, or None. There is no fallback to shorter keys.
        """
        match = self._search(key, must_be_terminal, must_match_fully=True)
        if match is None:
            return None
        return match.node

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        """Return the payload stored with key, or default if key is absent."""
        node = self.find(key, must_be_terminal=True)
        if node is None:
            return default
        return node.payload

    def longest_prefix(self, key: str, must_be_terminal: bool = False) -> Optional[str]:
        """Find the longest prefix of key present in the trie.

        Args:
            key: Query string.
            must_be_terminal: Only report prefixes that are stored keys.

        Returns:
            The matched prefix, or None if no prefix satisfies the
            constraint.
        """
        match = self.longest_prefix_match(key, must_be_terminal)
        if match is None:
            return None
        return match.prefix

    def longest_prefix_match(
        self,
        key: str,
        must_be_terminal: bool = False,
    ) -> Optional[PrefixMatch[T]]:
        """Like longest_prefix, also reporting the node and match flags."""
        return self._search(key, must_be_terminal, must_match_fully=False)

    def find_all_prefixes(self, key: str) -> List[str]:
        """Find all stored keys that are prefixes of key.

        Returns:
            Matching keys ordered from shortest to longest.
        """
        node = self._root
        results: List[str] = []

        if node.is_terminal:
            results.append("")

        for depth, ch in enumerate(key, 1):
            node = _child(node, ch)
            if node is None:
                break
            if node.is_terminal:
                results.append(key[:depth])

        return results

    def remove(self, key: str, remove_subtree: bool = False) -> bool:
        """Remove key, or key and every key extending it.

        Args:
            key: Key to remove.
            remove_subtree: Drop the whole subtree below key, including
                keys that merely pass through it.

        Returns:
            True if anything was removed, False if key was not found.
        """
        path: List[Tuple[BranchNode, str]] = []
        node = self._root
        for ch in key:
            child = _child(node, ch)
            if child is None:
                log.debug("remove %r: path missing at %r", key, ch)
                return False
            path.append((node, ch))
            node = child

        removed_keys = _count_keys(node) if remove_subtree else 1
        outcome = _remove_target(node, remove_subtree)
        if not outcome.removed:
            log.debug("remove %r: not a stored key", key)
            return False

        for parent, ch in reversed(path):
            if outcome.prune:
                del parent.children[ch]
            elif outcome.replacement is not None:
                parent.children[ch] = outcome.replacement
            else:
                break
            outcome = _settle(parent)
            log.debug("remove %r: bubbled up to %r", key, ch)
        else:
            if outcome.prune:
                self._root = EmptyNode()
            elif outcome.replacement is not None:
                self._root = outcome.replacement

        self._size -= removed_keys
        return True

    def render(self, show_content: bool = False) -> str:
        """Render the tree shape, optionally with payloads."""
        return render_tree(self._root, show_content)

    def walk(self) -> Iterator[Tuple[str, Node]]:
        """Yield (path, node) for every node, pre-order, code point order."""
        return _walk(self._root)

    def keys(self) -> Iterator[str]:
        """Yield stored keys in lexicographic order."""
        for path, node in self.walk():
            if node.is_terminal:
                yield path

    def items(self) -> Iterator[Tuple[str, Optional[T]]]:
        """Yield (key, payload) pairs in lexicographic order."""
        for path, node in self.walk():
            if node.is_terminal:
                yield path, node.payload

    def is_empty(self) -> bool:
        return isinstance(self._root, EmptyNode)

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __len__(self) -> int:
        """Return number of stored keys."""
        return self._size

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"<Trie keys={self._size}>"

    def _search(
        self,
        key: str,
        must_be_terminal: bool,
        must_match_fully: bool,
    ) -> Optional[PrefixMatch[T]]:
        """Walk key, tracking the deepest stored key seen on the way.

        Stops when key is exhausted or the next code point has no child.
        The node reached is reported unless must_be_terminal rejects it,
        in which case the last stored key on the path is reported instead.
        With must_match_fully, a missing child or a rejected final node
        fails the search outright.
        """
        node = self._root
        last_terminal: Optional[Tuple[int, Node]] = None
        depth = 0
        while True:
            if node.is_terminal:
                last_terminal = (depth, node)
            if depth == len(key):
                full_match = True
                break
            child = _child(node, key[depth])
            if child is None:
                if must_match_fully:
                    log.debug("search %r: no child at depth %d", key, depth)
                    return None
                full_match = False
                break
            node = child
            depth += 1

        if must_be_terminal and not node.is_terminal:
            if must_match_fully or last_terminal is None:
                log.debug("search %r: no stored key on path", key)
                return None
            depth, node = last_terminal
            log.debug("search %r: fell back to %r", key, key[:depth])
            return PrefixMatch(key[:depth], node, is_terminal=True, full_match=False)

        return PrefixMatch(key[:depth], node, node.is_terminal, full_match)


def _child(node: Node, ch: str) -> Optional[Node]:
    if isinstance(node, BranchNode):
        return node.children.get(ch)
    return None


def _terminate(node: Node, key: str, payload) -> Node:
    """Mark node as the end of key, returning the node to store."""
    if node.is_terminal:
        raise KeyAlreadyExists(key)
    if isinstance(node, EmptyNode):
        return LeafNode(payload=payload, is_terminal=True)
    node.payload = payload
    node.is_terminal = True
    return node


def _remove_target(node: Node, remove_subtree: bool) -> RemovalOutcome:
    """Apply a removal to the node at the end of the key."""
    if isinstance(node, EmptyNode):
        return RemovalOutcome()
    if isinstance(node, LeafNode):
        if remove_subtree or node.is_terminal:
            return RemovalOutcome(removed=True, prune=True)
        return RemovalOutcome()
    if remove_subtree:
        return RemovalOutcome(removed=True, prune=True)
    if not node.is_terminal:
        return RemovalOutcome()
    # Keys below still route through this branch
    node.is_terminal = False
    node.payload = None
    return RemovalOutcome(removed=True)


def _settle(branch: BranchNode) -> RemovalOutcome:
    """Compact a branch after one of its children was dropped or replaced."""
    compacted = compact(branch)
    if compacted is None:
        return RemovalOutcome(removed=True, prune=True)
    if compacted is branch:
        return RemovalOutcome(removed=True)
    return RemovalOutcome(removed=True, replacement=compacted)


def _walk(root: Node, prefix: str = "") -> Iterator[Tuple[str, Node]]:
    stack: List[Tuple[str, Node]] = [(prefix, root)]
    while stack:
        path, node = stack.pop()
        yield path, node
        for ch, child in reversed(list(iter_children(node))):
            stack.append((path + ch, child))


def _count_keys(node: Node) -> int:
    return sum(1 for _, n in _walk(node) if n.is_terminal)
