"""YAML parsing and validation for trie definitions.

This module handles parsing trie definition files and validating their
structure. Definitions are only ever read; a trie is never written back.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any, Optional, Union

import yaml

from codepoint_trie.errors import DefinitionError

VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


@dataclass
class Entry:
    """A key to insert, with its optional payload."""
    key: str
    payload: Optional[Any] = None


@dataclass
class TrieDocument:
    """Parsed trie definition."""
    config: Dict[str, Any] = field(default_factory=dict)
    entries: List[Entry] = field(default_factory=list)


def parse_yaml_file(path: Union[str, Path]) -> TrieDocument:
    """Parse and validate a trie definition file.

    Args:
        path: Path to the YAML file

    Returns:
        TrieDocument with parsed configuration and entries

    Raises:
        DefinitionError: If the file is invalid or missing required fields
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path, encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DefinitionError(f"Invalid YAML syntax: {e}")

    return _validate_document(data)


def parse_yaml_string(content: str) -> TrieDocument:
    """Parse a trie definition from a string.

    Args:
        content: YAML content as string

    Returns:
        TrieDocument with parsed configuration and entries
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DefinitionError(f"Invalid YAML syntax: {e}")

    return _validate_document(data)


def _validate_document(data: Any) -> TrieDocument:
    """Validate parsed YAML data structure.

    Raises:
        DefinitionError: If validation fails
    """
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise DefinitionError("YAML root must be a mapping")

    config = data.get('config', {})
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise DefinitionError("'config' must be a mapping")
    _validate_config(config)

    entries = data.get('entries', [])
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise DefinitionError("'entries' must be a list")

    return TrieDocument(
        config=config,
        entries=[_validate_entry(entry, i) for i, entry in enumerate(entries)],
    )


def _validate_config(config: Dict[str, Any]) -> None:
    if 'show_content' in config and not isinstance(config['show_content'], bool):
        raise DefinitionError("'config.show_content' must be a boolean")

    if 'log_level' in config:
        level = config['log_level']
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            raise DefinitionError(
                f"'config.log_level' has invalid value {level!r}. "
                f"Valid levels: {sorted(VALID_LOG_LEVELS)}"
            )


def _validate_entry(entry: Any, index: int) -> Entry:
    """Validate a single entry.

    Args:
        entry: Bare key string, or mapping with 'key' and optional 'payload'
        index: Index in entries list (for error messages)

    Returns:
        Validated Entry

    Raises:
        DefinitionError: If validation fails
    """
    if isinstance(entry, str):
        # Short form: just the key
        return Entry(key=entry)

    if not isinstance(entry, dict):
        raise DefinitionError(f"Entry {index} must be a string or mapping")

    if 'key' not in entry:
        raise DefinitionError(f"Entry {index} missing required field 'key'")
    if not isinstance(entry['key'], str):
        raise DefinitionError(f"Entry {index}: 'key' must be a string")

    unknown = set(entry) - {'key', 'payload'}
    if unknown:
        raise DefinitionError(
            f"Entry {index} has unknown field(s): {', '.join(sorted(unknown))}"
        )

    return Entry(key=entry['key'], payload=entry.get('payload'))
