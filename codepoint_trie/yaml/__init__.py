"""YAML-based trie definitions.

This module provides a declarative YAML format for populating a Trie, plus
a small CLI for inspecting the result.

Example routes.yaml:
    config:
      show_content: true
      log_level: INFO

    entries:
      - key: "https://google.com"
        payload: 1
      - key: "http://wikipedia.org"
        payload: 2
      - "https://imdb.com"

Usage:
    from codepoint_trie.yaml import load_trie
    trie, doc = load_trie('routes.yaml')

CLI:
    python -m codepoint_trie.yaml routes.yaml
"""

from .parser import parse_yaml_file, parse_yaml_string, TrieDocument, Entry
from .converter import document_to_trie
from .runner import load_trie, main

__all__ = [
    'parse_yaml_file',
    'parse_yaml_string',
    'TrieDocument',
    'Entry',
    'document_to_trie',
    'load_trie',
    'main',
]
