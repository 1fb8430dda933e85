"""CLI entry point for codepoint_trie.yaml module.

Usage:
    python -m codepoint_trie.yaml [options] [yaml_file]

Example:
    python -m codepoint_trie.yaml routes.yaml
    python -m codepoint_trie.yaml --show-content routes.yaml
    python -m codepoint_trie.yaml --longest-prefix "https://imdb.com/title" --terminal routes.yaml
"""

from .runner import main
import sys

if __name__ == '__main__':
    sys.exit(main())
