#!/usr/bin/env python3
"""Token document loading.

This module turns a raw token document into a TokenTree:
- JSON or YAML source files
- Reserved, prefix-marked keys skipped at every level
- Explicit leaf/group discrimination (a mapping with a value key is a leaf)
- Last-collection-wins de-duplication of token paths

Example:
    >>> loader = TokenTreeLoader()
    >>> tree = loader.load({"core": {"color": {"red": {"value": "#ff0000"}}}})
    >>> tree.get("color.red").raw_value
    '#ff0000'
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from tokenforge.core.constants import DocumentKey
from tokenforge.core.errors import StructuralError
from tokenforge.infrastructure.logger import Logger, get_logger
from tokenforge.tokens.models import Group, Leaf, TokenNode, TokenTree

# Scalar keys tolerated on groups without being tokens
_GROUP_METADATA_KEYS = frozenset(DocumentKey.TYPE_KEYS + DocumentKey.DESCRIPTION_KEYS)


def is_leaf(node: Any) -> bool:
    """Return True if a document node is a token.

    A node is a leaf iff it is a mapping with a direct value field; the
    value itself may be a literal, a reference string or a mapping of
    sub-fields (composite token).
    """
    return isinstance(node, Mapping) and any(key in node for key in DocumentKey.VALUE_KEYS)


def _first(node: Mapping, keys) -> Any:
    for key in keys:
        if key in node:
            return node[key]
    return None


def read_document(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Read and parse a token document from disk.

    Args:
        file_path: JSON file, or YAML when the suffix is .yaml/.yml

    Returns:
        Parsed document

    Raises:
        StructuralError: If the file is missing or unparsable
    """
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StructuralError(f"Cannot read token document {path}: {e}")

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            document = yaml.safe_load(text)
        else:
            document = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise StructuralError(f"Invalid token document {path}: {e}")

    if not isinstance(document, dict):
        raise StructuralError(f"Token document {path} must contain a mapping of collections")
    return document


class TokenTreeLoader:
    """Builds a TokenTree from a parsed document."""

    def __init__(self, reserved_prefix: str = DocumentKey.RESERVED_PREFIX, logger: Optional[Logger] = None):
        """Initialize loader.

        Args:
            reserved_prefix: Keys starting with this marker are never tokens
            logger: Optional logger
        """
        self.reserved_prefix = reserved_prefix
        self._logger = logger or get_logger()

    def is_reserved(self, key: str) -> bool:
        return bool(self.reserved_prefix) and key.startswith(self.reserved_prefix)

    def load_file(self, file_path: Union[str, Path]) -> TokenTree:
        """Read, parse and load a token document file."""
        return self.load(read_document(file_path))

    def load(self, document: Any) -> TokenTree:
        """Load a parsed document.

        Args:
            document: Mapping of collection name to token subtree

        Returns:
            TokenTree with collections, effective tokens and index

        Raises:
            StructuralError: If the document is not a well-formed token tree
        """
        if not isinstance(document, Mapping):
            raise StructuralError("Token document must be a mapping of collections")

        tree = TokenTree()
        for collection, subtree in document.items():
            if self.is_reserved(collection):
                continue
            if not isinstance(subtree, Mapping):
                raise StructuralError("Collection must be a mapping", path=collection)
            if is_leaf(subtree):
                raise StructuralError("Collection root cannot be a token", path=collection)
            tree.collections[collection] = self._build_group(subtree, [], collection)

        positions: Dict[str, int] = {}
        for collection, leaf in tree.leaves():
            token = leaf.token
            key = token.name
            if key in positions:
                previous = tree.tokens[positions[key]]
                self._logger.debug(
                    "Token shadowed by later collection",
                    path=key,
                    previous=previous.source_collection,
                    winner=collection,
                )
                tree.shadowed.append(previous)
                tree.tokens[positions[key]] = token
            else:
                positions[key] = len(tree.tokens)
                tree.tokens.append(token)
            tree.index[key] = token

        self._logger.debug(
            "Loaded token tree", collections=len(tree.collections), tokens=len(tree.tokens)
        )
        return tree

    def _build_group(self, mapping: Mapping, path: List[str], collection: str) -> Group:
        group = Group()
        for key, child in mapping.items():
            key = str(key)
            if self.is_reserved(key):
                continue

            child_path = path + [key]
            location = ".".join([collection] + child_path)

            if is_leaf(child):
                group.children[key] = Leaf(self._build_token(child, child_path, collection))
            elif isinstance(child, Mapping):
                if not self._has_children(child):
                    raise StructuralError("Token has no value field and no children", path=location)
                group.children[key] = self._build_group(child, child_path, collection)
            elif key in _GROUP_METADATA_KEYS:
                continue
            else:
                raise StructuralError(
                    f"Expected a group or token, found {type(child).__name__}", path=location
                )
        return group

    def _has_children(self, mapping: Mapping) -> bool:
        return any(
            isinstance(value, Mapping) and not self.is_reserved(str(key))
            for key, value in mapping.items()
        )

    def _build_token(self, node: Mapping, path: List[str], collection: str) -> TokenNode:
        raw_value = _first(node, DocumentKey.VALUE_KEYS)
        if isinstance(raw_value, Mapping):
            raw_value = dict(raw_value)
        return TokenNode(
            path=tuple(path),
            raw_value=raw_value,
            source_collection=collection,
            token_type=_first(node, DocumentKey.TYPE_KEYS),
            description=_first(node, DocumentKey.DESCRIPTION_KEYS),
        )
