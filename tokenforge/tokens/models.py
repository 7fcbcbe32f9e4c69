"""Token tree data model.

A token document is a mapping of collections; each collection is a Group
whose children are either Groups or Leaves. Every Leaf wraps one TokenNode.
TokenTree also exposes the flat, de-duplicated token list and the
dotted-path index used for reference lookup.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from tokenforge.core.constants import TokenPath


@dataclass
class TokenNode:
    """A single design token.

    ``raw_value`` is what the document says; ``resolved_value`` is filled in
    once by the resolver and then rewritten only on per-platform copies.
    """

    path: TokenPath
    raw_value: Any
    source_collection: str
    token_type: Optional[str] = None
    description: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    resolved_value: Any = None
    resolved: bool = False
    final_name: Optional[str] = None

    @property
    def name(self) -> str:
        """Dotted path, the form used inside references."""
        return ".".join(self.path)

    @property
    def value(self) -> Any:
        """Resolved value when available, raw value otherwise."""
        return self.resolved_value if self.resolved else self.raw_value

    @property
    def is_composite(self) -> bool:
        return isinstance(self.raw_value, dict)

    @property
    def category(self) -> Optional[str]:
        return self.attributes.get("category")

    def view(self) -> Dict[str, Any]:
        """Flat field mapping that filter rules are evaluated against."""
        fields = dict(self.attributes)
        fields.update(
            {
                "path": self.name,
                "name": self.final_name or self.name,
                "collection": self.source_collection,
                "token_type": self.token_type,
                "value": self.value,
            }
        )
        return fields

    def copy(self) -> "TokenNode":
        """Independent deep copy for per-platform transformation."""
        return copy.deepcopy(self)


@dataclass
class Leaf:
    """Tree node carrying a token."""

    token: TokenNode


@dataclass
class Group:
    """Tree node carrying ordered children."""

    children: Dict[str, Union["Group", Leaf]] = field(default_factory=dict)

    def walk(self) -> Iterator[Leaf]:
        """Yield leaves depth-first in document order."""
        for child in self.children.values():
            if isinstance(child, Leaf):
                yield child
            else:
                yield from child.walk()

    def count(self) -> int:
        return sum(1 for _ in self.walk())


@dataclass
class TokenTree:
    """Loaded token document.

    Attributes:
        collections: Collection name to root Group, in document order
        tokens: Effective tokens, one per path (last collection wins)
        index: Dotted path to effective token
        shadowed: Tokens replaced by a later collection with the same path
    """

    collections: Dict[str, Group] = field(default_factory=dict)
    tokens: List[TokenNode] = field(default_factory=list)
    index: Dict[str, TokenNode] = field(default_factory=dict)
    shadowed: List[TokenNode] = field(default_factory=list)

    def get(self, path: Union[str, TokenPath]) -> Optional[TokenNode]:
        if not isinstance(path, str):
            path = ".".join(path)
        return self.index.get(path)

    def leaves(self) -> Iterator[Tuple[str, Leaf]]:
        """Yield (collection, leaf) for every leaf, shadowed ones included."""
        for collection, group in self.collections.items():
            for leaf in group.walk():
                yield collection, leaf

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self.index

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[TokenNode]:
        return iter(self.tokens)
