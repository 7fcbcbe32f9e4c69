"""Shared pytest fixtures for TokenForge tests."""
import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from tokenforge.resolve.resolver import AliasResolver
from tokenforge.tokens.loader import TokenTreeLoader
from tokenforge.tokens.models import TokenNode, TokenTree

SAMPLE_DOCUMENT: Dict[str, Any] = {
    "$themes": [],
    "$metadata": {"tokenSetOrder": ["01 - Primitives", "02 - Semantic", "03 - Components"]},
    "01 - Primitives": {
        "color": {
            "brand": {
                "primary": {"value": "#3366FF", "type": "color"},
                "overlay": {"value": "#00000080", "type": "color"},
            },
            "neutral": {"white": {"value": "#ffffff", "type": "color"}},
        },
        "spacing": {"base": {"value": "8", "type": "spacing"}},
        "duration": {"fast": {"value": "150", "type": "duration"}},
        "opacity": {"disabled": {"value": "40%", "type": "opacity"}},
        "fontFamilies": {"body": {"value": "Inter", "type": "fontFamilies"}},
    },
    "02 - Semantic": {
        "color": {"text": {"primary": {"value": "{color.brand.primary}", "type": "color"}}},
        "spacing": {"md": {"value": "{spacing.base} * 2", "type": "spacing"}},
    },
    "03 - Components": {
        "button": {
            "padding": {"value": "{spacing.md}", "type": "spacing"},
            "label": {
                "value": {"fontFamily": "{fontFamilies.body}", "fontSize": "16"},
                "type": "typography",
            },
        }
    },
}


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """Small three-collection document with aliases, arithmetic and a composite."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Temporary working directory."""
    return tmp_path


@pytest.fixture
def tokens_file(temp_dir: Path, sample_document: Dict[str, Any]) -> Path:
    """Sample document written as tokens/tokens.json."""
    path = temp_dir / "tokens" / "tokens.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


@pytest.fixture
def config_file(temp_dir: Path, tokens_file: Path) -> Path:
    """YAML configuration pointing at the sample tokens, building under temp_dir."""
    settings = {
        "tokenforge": {
            "source": str(tokens_file),
            "expected_collections": ["01 - Primitives", "02 - Semantic", "03 - Components"],
            "platforms": {
                "web/css": {"build_path": str(temp_dir / "build" / "web")},
                "web/js": {"build_path": str(temp_dir / "build" / "web")},
                "web/json": {"build_path": str(temp_dir / "build" / "web")},
                "ios/swift": {"build_path": str(temp_dir / "build" / "ios")},
                "android/xml": {"build_path": str(temp_dir / "build" / "android")},
                "android/compose": {"build_path": str(temp_dir / "build" / "android")},
            },
        }
    }
    path = temp_dir / "tokenforge.yaml"
    path.write_text(yaml.safe_dump(settings), encoding="utf-8")
    return path


@pytest.fixture
def tree(sample_document: Dict[str, Any]) -> TokenTree:
    """Loaded, unresolved sample tree."""
    return TokenTreeLoader().load(sample_document)


@pytest.fixture
def resolved_tree(tree: TokenTree) -> TokenTree:
    """Loaded and fully resolved sample tree."""
    return AliasResolver(tree).resolve_all()


@pytest.fixture
def make_token():
    """Factory for resolved, transformed token copies."""

    def factory(path, value, final_name=None, category=None, raw_value=None):
        return TokenNode(
            path=tuple(path.split(".")),
            raw_value=value if raw_value is None else raw_value,
            source_collection="core",
            attributes={"category": category} if category else {},
            resolved_value=value,
            resolved=True,
            final_name=final_name,
        )

    return factory
