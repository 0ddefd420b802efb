"""Tests for the package's public surface."""

import tree_converter


class TestPackageExports:
    """Test top-level imports."""

    def test_version(self):
        assert tree_converter.__version__ == "0.1.0"

    def test_all_names_resolve(self):
        for name in tree_converter.__all__:
            assert hasattr(tree_converter, name), name

    def test_top_level_conversion(self):
        """Test the one-call path from text to listing."""
        result = tree_converter.convert('<x a="1" b="2"/>')

        assert result.format is tree_converter.SourceFormat.MARKUP
        assert tree_converter.render_listing(result.tree) == (
            "Element:\n"
            "path = x\n"
            "value = null\n"
            "attributes:\n"
            'a = "1"\n'
            'b = "2"\n'
        )
