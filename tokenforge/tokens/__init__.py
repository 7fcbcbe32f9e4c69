"""TokenForge token model, loading and validation."""

from .loader import TokenTreeLoader, is_leaf, read_document
from .models import Group, Leaf, TokenNode, TokenTree
from .validation import ValidationReport, validate_document, validate_file

__all__ = [
    "TokenNode",
    "TokenTree",
    "Group",
    "Leaf",
    "TokenTreeLoader",
    "is_leaf",
    "read_document",
    "ValidationReport",
    "validate_document",
    "validate_file",
]
