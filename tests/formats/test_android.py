#!/usr/bin/env python3
"""Tests for the Android format emitters."""

from tokenforge.formats.android import FORMATS, android_compose, android_string, kotlin_literal
from tokenforge.formats.base import FormatContext


def context(options=None):
    return FormatContext(platform="android/xml", destination="colors.xml", options=options or {})


class TestXmlResources:
    """Tests for the XML resource emitters."""

    def test_colors(self, make_token):
        """Test color resources keyed by final name."""
        token = make_token("color.brand.primary", "#FF3366FF", final_name="color_brand_primary")

        text = FORMATS["android/colors"]([token], context())

        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        assert '  <color name="color_brand_primary">#FF3366FF</color>' in text
        assert text.endswith("</resources>\n")

    def test_dimens(self, make_token):
        """Test dimension resources."""
        text = FORMATS["android/dimens"]([make_token("spacing.base", "8dp", final_name="spacing_base")], context())

        assert '  <dimen name="spacing_base">8dp</dimen>' in text

    def test_escaping(self, make_token):
        """Test markup in values is escaped."""
        text = FORMATS["android/strings"]([make_token("copy.legal", "Terms & <Conditions>")], context())

        assert '<string name="copy_legal">Terms &amp; &lt;Conditions&gt;</string>' in text

    def test_string_quotes(self, make_token):
        """Test apostrophes and quotes get backslash escapes in strings."""
        token = make_token("copy.cta", 'Don\'t say "no"')

        text = FORMATS["android/strings"]([token], context())

        assert '<string name="copy_cta">Don\\\'t say \\"no\\"</string>' in text
        assert "&#39;" not in text

    def test_android_string(self):
        """Test backslashes, markup and leading resource sigils."""
        assert android_string("a\\b") == "a\\\\b"
        assert android_string("<b>") == "&lt;b&gt;"
        assert android_string("@home") == "\\@home"
        assert android_string("?attr") == "\\?attr"
        assert android_string("mid@dle") == "mid@dle"

    def test_composite(self, make_token):
        """Test composite tokens produce one resource per field."""
        token = make_token("button.label", {"fontFamily": "Inter"}, final_name="button_label")

        text = FORMATS["android/strings"]([token], context())

        assert '<string name="button_label_fontfamily">Inter</string>' in text

    def test_formatter_names(self):
        """Test generated emitters are named after their element."""
        assert FORMATS["android/colors"].__name__ == "android_colors"


class TestKotlinLiteral:
    """Tests for Kotlin literal rendering."""

    def test_literals(self):
        """Test colors, densities, numbers and strings."""
        assert kotlin_literal("#FF3366FF") == "Color(0xFF3366FF)"
        assert kotlin_literal("16dp") == "16.dp"
        assert kotlin_literal("14sp") == "14.sp"
        assert kotlin_literal(0.4) == "0.4"
        assert kotlin_literal("Inter") == '"Inter"'
        assert kotlin_literal("$price") == '"\\$price"'
        assert kotlin_literal(["a", 2]) == 'listOf("a", 2)'


class TestCompose:
    """Tests for android/compose."""

    def test_grouping(self, make_token):
        """Test category objects in fixed order."""
        tokens = [
            make_token("spacing.base", "8dp", final_name="spacing_base", category="spacing"),
            make_token("color.brand.primary", "#FF3366FF", final_name="color_brand_primary", category="color"),
            make_token("misc.flag", True, final_name="misc_flag"),
        ]

        text = android_compose(tokens, context())

        assert "package com.example.tokens" in text
        assert "object Tokens {" in text
        assert "        val colorBrandPrimary = Color(0xFF3366FF)" in text
        assert "        val spacingBase = 8.dp" in text
        assert "        val miscFlag = true" in text
        assert text.index("object Colors") < text.index("object Spacing") < text.index("object Other")

    def test_options(self, make_token):
        """Test package and object names."""
        text = android_compose(
            [make_token("gap", "4dp", category="spacing")],
            context({"packageName": "com.vibors.tokens", "objectName": "Vibors"}),
        )

        assert "package com.vibors.tokens" in text
        assert "object Vibors {" in text

    def test_empty_groups_omitted(self, make_token):
        """Test only groups with members appear."""
        text = android_compose([make_token("gap", "4dp", category="spacing")], context())

        assert "object Spacing" in text
        assert "object Colors" not in text
