"""Generic prefix trie keyed by Unicode code points.

This package provides a compact, mutable trie that maps strings to optional
payloads:

- Trie: insert, exact lookup, longest-prefix search, removal, rendering
- EmptyNode / LeafNode / BranchNode: the three node shapes
- KeyAlreadyExists: raised when inserting a stored key

Example:
    from codepoint_trie import Trie

    trie = Trie()
    trie.insert("a", 1)
    trie.insert("abc", 2)
    print(trie.render(show_content=True))
"""

from .errors import TrieError, KeyAlreadyExists, InvalidNodeState, DefinitionError
from .node import Node, EmptyNode, LeafNode, BranchNode
from .trie import Trie, PrefixMatch, RemovalOutcome
from .render import render_tree

__all__ = [
    # Errors
    'TrieError',
    'KeyAlreadyExists',
    'InvalidNodeState',
    'DefinitionError',
    # Nodes
    'Node',
    'EmptyNode',
    'LeafNode',
    'BranchNode',
    # Engine
    'Trie',
    'PrefixMatch',
    'RemovalOutcome',
    'render_tree',
]
