"""Exceptions raised by the trie engine and its definition loader.

Absence of a key is never an error: lookups return None and removals
return False. Only structural conditions are raised.
"""


class TrieError(Exception):
    """Base class for all trie errors."""
    pass


class KeyAlreadyExists(TrieError, ValueError):
    """Raised when inserting a key that is already stored.

    Insertion never overwrites; remove the key first to replace its payload.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key already exists: {key!r}")


class InvalidNodeState(TrieError, RuntimeError):
    """Raised when a node is used in a way its variant does not allow."""
    pass


class DefinitionError(TrieError):
    """Error parsing or validating a YAML trie definition."""
    pass
