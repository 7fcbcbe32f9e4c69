#!/usr/bin/env python3
"""Tests for TransformPipeline."""

import pytest

from tokenforge.core.errors import TransformError, UnsupportedTransformValue
from tokenforge.tokens.models import TokenNode
from tokenforge.transforms.base import Transform
from tokenforge.transforms.pipeline import PipelineResult, TransformPipeline


def make_token(path="a", value="x", resolved=True):
    return TokenNode(
        path=tuple(path.split(".")),
        raw_value=value,
        source_collection="core",
        resolved_value=value if resolved else None,
        resolved=resolved,
    )


class UppercaseTransform(Transform):
    """Transform that uppercases values."""

    def transform(self, token, options):
        return str(token.value).upper()


class SuffixTransform(Transform):
    """Transform that appends the platform name."""

    def transform(self, token, options):
        return f"{token.value}-{options.get('platform')}"


class RejectingTransform(Transform):
    """Transform that passes everything through."""

    def transform(self, token, options):
        raise UnsupportedTransformValue("not supported")


class TestTransformPipeline:
    """Tests for TransformPipeline class."""

    def test_init_default(self):
        """Test default initialization."""
        pipeline = TransformPipeline()

        assert len(pipeline) == 0
        assert pipeline.options == {}

    def test_add_remove_clear(self):
        """Test managing transforms."""
        pipeline = TransformPipeline()
        pipeline.add_transform(UppercaseTransform(name="upper"))
        pipeline.add_transform(SuffixTransform(name="suffix"))

        assert [t.name for t in pipeline.get_transforms()] == ["upper", "suffix"]
        assert pipeline.remove_transform("upper") is True
        assert pipeline.remove_transform("upper") is False

        pipeline.clear_transforms()
        assert len(pipeline) == 0

    def test_order_matters(self):
        """Test transforms chain in order."""
        pipeline = TransformPipeline(
            [SuffixTransform(), UppercaseTransform()], options={"platform": "web"}
        )

        result = pipeline.apply([make_token(value="x")])

        assert result.tokens[0].value == "X-WEB"

    def test_copies_not_originals(self):
        """Test original tokens are untouched."""
        token = make_token(value="x")

        result = TransformPipeline([UppercaseTransform()]).apply([token])

        assert result.tokens[0] is not token
        assert token.value == "x"

    def test_preserves_token_order(self):
        """Test output order follows input order."""
        tokens = [make_token("b"), make_token("a"), make_token("c")]

        result = TransformPipeline([UppercaseTransform()]).apply(tokens)

        assert [t.name for t in result.tokens] == ["b", "a", "c"]
        assert list(result.by_path()) == ["b", "a", "c"]

    def test_unresolved_token(self):
        """Test transforming before resolution is an error."""
        with pytest.raises(TransformError, match="resolved"):
            TransformPipeline([UppercaseTransform()]).apply([make_token(resolved=False)])

    def test_warnings_collected(self):
        """Test passthrough warnings are gathered and processing continues."""
        pipeline = TransformPipeline([RejectingTransform(name="reject"), UppercaseTransform()])

        result = pipeline.apply([make_token("a"), make_token("b")])

        assert [w.path for w in result.warnings] == ["a", "b"]
        assert [t.value for t in result.tokens] == ["X", "X"]

    def test_stats(self):
        """Test pipeline and per-transform statistics."""
        pipeline = TransformPipeline([RejectingTransform(name="reject")])
        pipeline.apply([make_token()])

        stats = pipeline.get_stats()

        assert stats["tokens"] == 1
        assert stats["warnings"] == 1
        assert stats["transform_stats"]["reject"]["passthrough"] == 1

        pipeline.reset_stats()
        assert pipeline.get_stats()["tokens"] == 0
        assert pipeline.get_stats()["transform_stats"]["reject"]["passthrough"] == 0

    def test_empty_input(self):
        """Test empty token lists."""
        assert TransformPipeline([UppercaseTransform()]).apply([]) == PipelineResult()

    def test_repr(self):
        """Test repr lists transform names."""
        pipeline = TransformPipeline([UppercaseTransform(name="upper")])

        assert repr(pipeline) == "<TransformPipeline transforms=['upper']>"
