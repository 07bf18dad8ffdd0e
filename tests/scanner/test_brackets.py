"""Tests for curly-brace matching."""

from sass_hints.scanner.brackets import block_end, find_matching_close


class TestFindMatchingClose:
    """Tests for find_matching_close()."""

    def test_nested_braces(self) -> None:
        assert find_matching_close("{ { } }") == 7

    def test_unbalanced_returns_start(self) -> None:
        assert find_matching_close("{ {") == 0

    def test_unbalanced_from_offset(self) -> None:
        assert find_matching_close("ab { {", 2) == 2

    def test_starts_counting_at_offset(self) -> None:
        text = "{ } @mixin a { b { } }"
        assert find_matching_close(text, 4) == len(text)

    def test_no_braces(self) -> None:
        assert find_matching_close("plain text", 3) == 3

    def test_text_after_block_ignored(self) -> None:
        assert find_matching_close("{ a } { b }") == 5


class TestBlockEnd:
    """Tests for block_end()."""

    def test_balanced(self) -> None:
        assert block_end("@mixin a { } rest", 0) == 12

    def test_unbalanced_extends_to_end(self) -> None:
        text = "@mixin a { color: red;"
        assert block_end(text, 0) == len(text)
