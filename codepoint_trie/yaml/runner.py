"""Command line inspection of YAML trie definitions.

Loads a definition file into a Trie, optionally removes keys, answers
lookups and prints the rendered tree.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from codepoint_trie.errors import TrieError
from codepoint_trie.trie import Trie

from .parser import parse_yaml_file, TrieDocument
from .converter import document_to_trie

log = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)-8s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def load_trie(yaml_path: Union[str, Path]) -> Tuple[Trie[Any], TrieDocument]:
    """Load a trie from a YAML definition file.

    Args:
        yaml_path: Path to the YAML file

    Returns:
        The populated trie and the parsed document

    Example:
        trie, doc = load_trie('routes.yaml')
        print(trie.render(doc.config.get('show_content', False)))
    """
    yaml_path = Path(yaml_path)
    doc = parse_yaml_file(yaml_path)
    trie = document_to_trie(doc)
    log.debug("Built trie from %s", yaml_path)
    return trie, doc


def setup_logging(level: Union[int, str]) -> None:
    """Send log records to stderr at the given level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
    )
    logging.getLogger('codepoint_trie').setLevel(level)


def main(args: Optional[List[str]] = None) -> int:
    """CLI entry point for inspecting a trie definition.

    Usage:
        python -m codepoint_trie.yaml [options] [yaml_file]

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    import argparse

    parser = argparse.ArgumentParser(
        description='Load a trie from a YAML definition and inspect it',
        prog='python -m codepoint_trie.yaml',
    )
    parser.add_argument(
        'yaml_file',
        nargs='?',
        default='trie.yaml',
        help='Path to the YAML file (default: trie.yaml)',
    )
    parser.add_argument(
        '--show-content',
        action='store_true',
        default=None,
        help='Render payloads next to stored keys',
    )
    parser.add_argument(
        '--remove',
        action='append',
        default=[],
        metavar='KEY',
        help='Remove KEY before answering queries (repeatable)',
    )
    parser.add_argument(
        '--subtree',
        action='store_true',
        help='With --remove, also remove every key extending KEY',
    )
    parser.add_argument(
        '--find',
        action='append',
        default=[],
        metavar='KEY',
        help='Look up exactly KEY (repeatable)',
    )
    parser.add_argument(
        '--longest-prefix',
        action='append',
        default=[],
        metavar='KEY',
        help='Report the longest prefix of KEY in the trie (repeatable)',
    )
    parser.add_argument(
        '--terminal',
        action='store_true',
        help='Only accept stored keys in --find and --longest-prefix',
    )
    parser.add_argument(
        '--render',
        action='store_true',
        help='Print the tree even when queries are given',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log engine activity and print tracebacks',
    )

    parsed = parser.parse_args(args)

    try:
        yaml_path = Path(parsed.yaml_file)
        doc = parse_yaml_file(yaml_path)

        level = 'DEBUG' if parsed.verbose else doc.config.get('log_level', 'WARNING')
        setup_logging(level)

        trie = document_to_trie(doc)

        for key in parsed.remove:
            removed = trie.remove(key, remove_subtree=parsed.subtree)
            print(f"remove {key!r}: {'removed' if removed else 'not found'}")

        for key in parsed.find:
            node = trie.find(key, must_be_terminal=parsed.terminal)
            if node is None:
                print(f"find {key!r}: not found")
            elif node.is_terminal:
                print(f"find {key!r}: stored, payload {node.payload!r}")
            else:
                print(f"find {key!r}: path only")

        for key in parsed.longest_prefix:
            prefix = trie.longest_prefix(key, must_be_terminal=parsed.terminal)
            if prefix is None:
                print(f"longest prefix of {key!r}: none")
            else:
                print(f"longest prefix of {key!r}: {prefix!r}")

        if parsed.render or not (parsed.find or parsed.longest_prefix):
            show_content = parsed.show_content
            if show_content is None:
                show_content = doc.config.get('show_content', False)
            sys.stdout.write(trie.render(show_content=show_content))

        return 0

    except (FileNotFoundError, TrieError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
