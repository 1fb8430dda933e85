"""Convert parsed trie definitions to populated Trie objects."""

import logging
from typing import Any, Optional

from codepoint_trie.trie import Trie

from .parser import TrieDocument

log = logging.getLogger(__name__)


def document_to_trie(doc: TrieDocument, trie: Optional[Trie[Any]] = None) -> Trie[Any]:
    """Insert every entry of a definition into a trie.

    Args:
        doc: Parsed trie definition
        trie: Trie to populate (a new one by default)

    Returns:
        The populated trie

    Raises:
        KeyAlreadyExists: If the definition repeats a key, or the key is
            already stored in trie. Entries before it stay inserted.
    """
    if trie is None:
        trie = Trie()

    for entry in doc.entries:
        trie.insert(entry.key, entry.payload)

    log.info("Loaded %d key(s)", len(doc.entries))
    return trie
