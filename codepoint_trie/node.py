"""Node variants of the code point trie.

A node is exactly one of three shapes:

- EmptyNode: placeholder with no content (the root of a fresh trie).
- LeafNode: payload and terminal flag, never any children.
- BranchNode: payload, terminal flag and at least one child keyed by a
  single code point.

Transitions between shapes replace the node object, so callers holding a
reference to a promoted or compacted node keep the old object.
"""

from dataclasses import dataclass, field
from typing import Optional, TypeVar, Generic, Dict, Iterator, Tuple, Union

from .errors import InvalidNodeState

T = TypeVar('T')


@dataclass
class EmptyNode:
    """Node without content or children."""

    is_terminal = False

    @property
    def payload(self):
        raise InvalidNodeState("EmptyNode carries no payload")


@dataclass
class LeafNode(Generic[T]):
    """Node at the end of a key with nothing below it.

    Attributes:
        payload: Value stored with the key, if any.
        is_terminal: Whether a key ends here.
    """
    payload: Optional[T] = None
    is_terminal: bool = False


@dataclass
class BranchNode(Generic[T]):
    """Node with one or more children.

    Attributes:
        children: Child nodes keyed by a single code point.
        payload: Value stored with the key ending here, if any.
        is_terminal: Whether a key ends here.
    """
    children: Dict[str, 'Node[T]'] = field(default_factory=dict)
    payload: Optional[T] = None
    is_terminal: bool = False

    def sorted_children(self) -> Iterator[Tuple[str, 'Node[T]']]:
        """Yield (code point, child) pairs in ascending code point order."""
        for ch in sorted(self.children):
            yield ch, self.children[ch]


Node = Union[EmptyNode, LeafNode[T], BranchNode[T]]


def promote(node: Node) -> BranchNode:
    """Return node as a BranchNode, keeping its payload and terminal flag.

    A fresh branch has no children until the caller adds one.
    """
    if isinstance(node, BranchNode):
        return node
    if isinstance(node, LeafNode):
        return BranchNode(payload=node.payload, is_terminal=node.is_terminal)
    return BranchNode()


def compact(node: BranchNode) -> Optional[Node]:
    """Collapse a childless branch.

    Returns:
        The branch itself while it still has children, a terminal
        LeafNode with the same payload when it has none, or None when
        it is neither terminal nor has children and should be pruned.
    """
    if node.children:
        return node
    if node.is_terminal:
        return LeafNode(payload=node.payload, is_terminal=True)
    return None


def iter_children(node: Node) -> Iterator[Tuple[str, Node]]:
    """Yield children in code point order; leaves and empties have none."""
    if isinstance(node, BranchNode):
        yield from node.sorted_children()
