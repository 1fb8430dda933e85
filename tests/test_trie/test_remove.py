"""Tests for Trie removal and compaction."""

import pytest

from codepoint_trie import Trie
from codepoint_trie.node import EmptyNode, LeafNode, BranchNode


def assert_no_dangling_branches(trie):
    for path, node in trie.walk():
        if isinstance(node, BranchNode):
            assert node.children, f"childless branch at {path!r}"


@pytest.fixture
def chain():
    trie = Trie()
    trie.insert("a", 1)
    trie.insert("abc", 2)
    trie.insert("abcd", 3)
    return trie


class TestRemoveKey:
    """Tests for removing single keys."""

    def test_remove_missing_path(self, chain):
        """Test removal of an absent key reports not found."""
        before = chain.render(show_content=True)
        assert chain.remove("xyz") is False
        assert chain.remove("abcde") is False
        assert chain.render(show_content=True) == before
        assert len(chain) == 3

    def test_remove_pass_through_node(self, chain):
        """Test a path-only node is not a key."""
        assert chain.remove("ab") is False
        assert chain.contains_key("abc") is True

    def test_remove_leaf(self, chain):
        """Test removing the deepest key collapses its parent."""
        assert chain.remove("abcd") is True
        assert chain.contains_key("abcd") is False
        assert chain.contains_key("abc") is True

        c = chain.root.children['a'].children['b'].children['c']
        assert c == LeafNode(payload=2, is_terminal=True)
        assert_no_dangling_branches(chain)
        assert len(chain) == 2

    def test_remove_keeps_descendants(self, chain):
        """Test removing an inner key keeps keys extending it."""
        assert chain.remove("abc") is True
        assert chain.contains_key("abc") is False
        assert chain.contains_key("abcd") is True
        assert chain.get("abcd") == 3
        assert chain.contains_key("a") is True

        c = chain.find("abc")
        assert isinstance(c, BranchNode)
        assert c.is_terminal is False
        assert c.payload is None
        assert len(chain) == 2

    def test_remove_twice(self, chain):
        """Test the second removal of a key finds nothing."""
        assert chain.remove("abc") is True
        assert chain.remove("abc") is False

    def test_bubble_up_prunes_dead_path(self):
        """Test removing a lone deep key prunes back to a stored ancestor."""
        trie = Trie()
        trie.insert("a", 1)
        trie.insert("abcdef", 2)

        assert trie.remove("abcdef") is True
        assert trie.root.children['a'] == LeafNode(payload=1, is_terminal=True)
        assert [path for path, _ in trie.walk()] == ["", "a"]

    def test_bubble_up_stops_at_sibling(self):
        """Test pruning stops at a node with other children."""
        trie = Trie()
        trie.insert("abx", 1)
        trie.insert("abyz", 2)

        assert trie.remove("abyz") is True
        b = trie.find("ab")
        assert isinstance(b, BranchNode)
        assert list(b.children) == ['x']
        assert_no_dangling_branches(trie)

    def test_remove_last_key_empties_root(self):
        """Test root returns to empty when the last key goes."""
        trie = Trie()
        trie.insert("abc", 1)
        assert trie.remove("abc") is True
        assert isinstance(trie.root, EmptyNode)
        assert trie.is_empty()
        assert len(trie) == 0
        assert trie.render() == "[empty]\n"

    def test_remove_empty_key_leaf_root(self):
        """Test removing the empty key from a leaf root."""
        trie = Trie()
        trie.insert("", 1)
        assert trie.remove("") is True
        assert isinstance(trie.root, EmptyNode)

    def test_remove_empty_key_branch_root(self):
        """Test removing the empty key keeps the other keys."""
        trie = Trie()
        trie.insert("", 1)
        trie.insert("a", 2)
        assert trie.remove("") is True
        assert trie.contains_key("") is False
        assert trie.contains_key("a") is True
        assert isinstance(trie.root, BranchNode)

    def test_remove_from_empty_trie(self):
        """Test removal on an empty trie."""
        trie = Trie()
        assert trie.remove("") is False
        assert trie.remove("a") is False
        assert trie.remove("", remove_subtree=True) is False

    def test_root_compacts_to_leaf(self):
        """Test stored empty key survives its last child."""
        trie = Trie()
        trie.insert("", 0)
        trie.insert("ab", 1)
        assert trie.remove("ab") is True
        assert trie.root == LeafNode(payload=0, is_terminal=True)

    def test_reinsert_after_remove(self, chain):
        """Test a removed key can be inserted again."""
        chain.remove("abc")
        chain.insert("abc", 20)
        assert chain.get("abc") == 20


class TestRemoveSubtree:
    """Tests for subtree removal."""

    def test_remove_subtree(self, chain):
        """Test removing a key drops every key extending it."""
        assert chain.remove("abc", remove_subtree=True) is True
        assert chain.contains_key("a") is True
        assert chain.contains_key("abc") is False
        assert chain.contains_key("abcd") is False
        assert chain.root.children['a'] == LeafNode(payload=1, is_terminal=True)
        assert len(chain) == 1

    def test_remove_subtree_at_pass_through_node(self, chain):
        """Test subtree removal below a path-only node."""
        assert chain.remove("ab", remove_subtree=True) is True
        assert list(chain.keys()) == ["a"]
        assert len(chain) == 1

    def test_remove_subtree_leaf(self, chain):
        """Test subtree removal of a leaf removes just that key."""
        assert chain.remove("abcd", remove_subtree=True) is True
        assert list(chain.keys()) == ["a", "abc"]

    def test_remove_subtree_root(self, chain):
        """Test subtree removal of the empty key clears the trie."""
        assert chain.remove("", remove_subtree=True) is True
        assert chain.is_empty()
        assert len(chain) == 0

    def test_remove_subtree_missing(self, chain):
        """Test subtree removal of an absent path."""
        assert chain.remove("abq", remove_subtree=True) is False
        assert len(chain) == 3

    def test_subtree_property(self):
        """Test no key under a removed subtree survives."""
        keys = ["car", "cart", "carton", "cat", "ca", "dog"]
        trie = Trie()
        for key in keys:
            trie.insert(key)

        assert trie.remove("car", remove_subtree=True) is True
        for key in keys:
            assert trie.contains_key(key) is (not key.startswith("car"))
        assert_no_dangling_branches(trie)


class TestRemoveSequences:
    """Tests for mixed insert/remove sequences."""

    def test_no_dangling_branches(self):
        """Test structure stays compact through many operations."""
        keys = ["", "a", "ab", "abc", "abd", "b", "bcd", "bce", "x" * 10, "日本", "日本語"]
        trie = Trie()
        for key in keys:
            trie.insert(key, key)
        assert_no_dangling_branches(trie)

        for key in ["ab", "bcd", "日本", "x" * 10, "", "abc"]:
            assert trie.remove(key) is True
            assert trie.contains_key(key) is False
            assert_no_dangling_branches(trie)

        assert sorted(trie.keys()) == sorted(["a", "abd", "b", "bce", "日本語"])
        assert len(trie) == 5

        for key in list(trie.keys()):
            assert trie.remove(key) is True
            assert_no_dangling_branches(trie)

        assert trie.is_empty()
        assert len(trie) == 0

    def test_remove_consistency(self):
        """Test keys extending a removed key stay reachable."""
        trie = Trie()
        trie.insert("k", 1)
        trie.insert("key", 2)
        trie.insert("keys", 3)

        assert trie.remove("k") is True
        assert trie.contains_key("k") is False
        assert trie.get("key") == 2
        assert trie.get("keys") == 3
