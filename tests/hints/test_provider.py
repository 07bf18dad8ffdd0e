"""Tests for SassHintProvider end to end over an in-memory editor."""

from pathlib import Path

import pytest

from sass_hints.core.config import ConfigStore, HintsConfig
from sass_hints.hints.provider import SassHintProvider
from sass_hints.hints.session import HintMode
from sass_hints.host import Position
from sass_hints.scanner.types import ORIGIN_BUILTIN, ORIGIN_LOCAL, SymbolKind

CENTER = "@mixin center($w, $h: 10) { $x: 1; .a{top:$h} }"
MIXINS_DOC = "@mixin big { }\n@mixin small($s) { }\n.a {\n  \n}"


def _names(response) -> list[str]:
    return [s.name for s in response.candidates]


@pytest.fixture
def provider(memory_fs) -> SassHintProvider:
    return SassHintProvider(fs=memory_fs)


class TestVariableHints:
    """Variable mode: locals, globals and imported variables."""

    def test_locals_inside_mixin(self, provider, make_editor) -> None:
        editor = make_editor(CENTER, 0, CENTER.index("$x: 1;") + len("$x: 1;"))
        editor.type_text("$")

        assert provider.has_hints(editor, "$")
        response = provider.get_hints("$")

        assert response is not None
        assert _names(response) == ["h", "w", "x"]
        details = {s.name: s.detail for s in response.candidates}
        assert details == {"h": "10", "w": "", "x": "1"}
        assert all(s.origin == ORIGIN_LOCAL for s in response.candidates)
        assert response.anchor == editor.get_cursor()

    def test_block_variables_hidden_outside_mixin(self, provider, make_editor) -> None:
        editor = make_editor(CENTER + "\n$g: 2;\n", 2, 0)
        editor.type_text("$")

        assert provider.has_hints(editor, "$")
        response = provider.get_hints("$")

        assert response is not None
        assert _names(response) == ["g"]

    def test_explicit_request_with_partial_token(self, provider, make_editor) -> None:
        editor = make_editor("$primary: red;\n.a { color: $pr }", 1, 15)

        assert provider.has_hints(editor, None)
        response = provider.get_hints()

        assert response is not None
        assert response.anchor == Position(1, 13)
        assert _names(response) == ["primary"]
        assert response.candidates[0].match_ranges == ((0, 2),)

    def test_max_hints_caps_results(self, memory_fs, make_editor) -> None:
        provider = SassHintProvider(ConfigStore(HintsConfig(max_hints=2)), memory_fs)
        editor = make_editor("$a1: 1;\n$a2: 2;\n$a3: 3;\n", 3, 0)
        editor.type_text("$")

        provider.has_hints(editor, "$")
        response = provider.get_hints("$")

        assert response is not None
        assert _names(response) == ["a1", "a2"]

    @pytest.mark.asyncio
    async def test_imported_variables(self, provider, make_editor) -> None:
        editor = make_editor(
            '@import "vars";\n$local: 1;\n', 2, 0, path=Path("/proj/main.scss")
        )
        provider.set_editor(editor)
        await provider.activate()
        editor.type_text("$")

        provider.has_hints(editor, "$")
        response = provider.get_hints("$")

        assert response is not None
        assert _names(response) == ["gutter", "local", "primary"]
        origins = {s.name: s.origin for s in response.candidates}
        assert origins["primary"] == "vars.scss"
        assert origins["local"] == "global"


class TestKeywordAndMixinHints:
    """Keyword mode and the transition into mixin mode."""

    def _start_keyword(self, provider, make_editor):
        editor = make_editor(MIXINS_DOC, 3, 2)
        editor.type_text("@")
        assert provider.has_hints(editor, "@")
        assert provider.session.mode is HintMode.KEYWORD
        return editor

    def test_keyword_candidates(self, provider, make_editor) -> None:
        editor = self._start_keyword(provider, make_editor)
        editor.type_text("inc")

        response = provider.get_hints("c")

        assert response is not None
        assert _names(response) == ["include"]
        assert response.candidates[0].badge == "K"

    def test_typed_include_switches_to_mixins(self, provider, make_editor) -> None:
        editor = self._start_keyword(provider, make_editor)
        editor.type_text("include")
        response = provider.get_hints("e")
        assert response is not None
        assert _names(response)[0] == "include"

        editor.type_text(" ")
        response = provider.get_hints(" ")

        assert response is not None
        assert response.requery
        assert response.candidates == []
        assert provider.session.mode is HintMode.MIXIN

        assert provider.has_hints(editor, None)
        response = provider.get_hints()

        assert response is not None
        assert _names(response) == ["big", "small"]
        assert [s.detail for s in response.candidates] == ["", "($s)"]
        assert response.anchor == Position(3, 11)

    def test_selecting_include_keeps_session_open(self, provider, make_editor) -> None:
        editor = self._start_keyword(provider, make_editor)
        editor.type_text("inc")
        response = provider.get_hints("c")
        assert response is not None

        assert provider.insert_hint(response.candidates[0]) is True
        assert editor.document.text.split("\n")[3] == "  @include "
        assert editor.get_cursor() == Position(3, 11)

        assert provider.has_hints(editor, None)
        response = provider.get_hints()
        assert response is not None
        assert _names(response) == ["big", "small"]

    def test_explicit_include_completes_mixins(self, provider, make_editor) -> None:
        editor = make_editor("@mixin small($s) { }\n.a { @include sm }", 1, 16)

        assert provider.has_hints(editor, None)
        assert provider.session.mode is HintMode.MIXIN
        response = provider.get_hints()

        assert response is not None
        assert _names(response) == ["small"]


class TestFunctionHints:
    """Function mode after ':'."""

    DOC = "@function double($n) { @return $n * 2; }\n.a {\n  width\n}"

    def test_space_clears_token_and_advances_anchor(self, provider, make_editor) -> None:
        editor = make_editor(self.DOC, 2, 7)
        editor.type_text(":")
        assert provider.has_hints(editor, ":")

        editor.type_text(" ")
        response = provider.get_hints(" ")
        assert response is not None
        assert response.anchor == Position(2, 9)
        assert _names(response) == ["double"]

        editor.type_text("do")
        response = provider.get_hints("o")
        assert response is not None
        assert _names(response) == ["double"]
        assert response.candidates[0].label == "double($n)"

    @pytest.mark.asyncio
    async def test_builtins_follow_config(self, provider, make_editor) -> None:
        editor = make_editor(self.DOC, 2, 7)
        provider.set_editor(editor)
        await provider.activate()
        assert any(s.origin == ORIGIN_BUILTIN for s in provider.cache.functions)

        provider.config.update(showBuiltFns=False)
        assert not any(s.origin == ORIGIN_BUILTIN for s in provider.cache.functions)

        editor.type_text(":")
        provider.has_hints(editor, ":")
        response = provider.get_hints(":")
        assert response is not None
        assert _names(response) == ["double"]

        provider.config.update(show_builtin_functions=True)
        assert any(s.origin == ORIGIN_BUILTIN for s in provider.cache.functions)


class TestSessionLifecycle:
    """Insertion, staleness and the enabled switch."""

    DOC = "$gutter: 8px;\n.a { margin: $gu }"

    def test_insert_replaces_token_and_closes(self, provider, make_editor) -> None:
        editor = make_editor(self.DOC, 1, 16)
        provider.has_hints(editor, None)
        response = provider.get_hints()
        assert response is not None

        assert provider.insert_hint(response.candidates[0]) is False
        assert editor.document.text.split("\n")[1] == ".a { margin: $gutter }"
        assert not provider.session.active

    def test_cursor_before_anchor_closes_session(self, provider, make_editor) -> None:
        editor = make_editor(self.DOC, 1, 16)
        provider.has_hints(editor, None)
        editor.set_cursor(1, 10)

        assert provider.get_hints() is None
        assert not provider.session.active

    def test_non_trigger_character_ignored(self, provider, make_editor) -> None:
        editor = make_editor(self.DOC, 1, 16)
        assert provider.has_hints(editor, "x") is False
        assert provider.get_hints("x") is None

    def test_disabled(self, provider, make_editor) -> None:
        editor = make_editor(self.DOC, 1, 16)
        provider.config.update(enabled=False)
        assert provider.has_hints(editor, None) is False
        assert provider.has_hints(editor, "$") is False

    def test_pool_reused_on_same_line(self, provider, make_editor) -> None:
        editor = make_editor(self.DOC, 1, 16)
        provider.has_hints(editor, None)
        pool = provider._pool
        provider.session.reset()
        provider.has_hints(editor, None)
        assert provider._pool is pool

    def test_insert_after_moving_to_later_line(self, provider, make_editor) -> None:
        editor = make_editor("$gutter: 8px;\n.a { margin: $gu\n  padding: 0; }", 1, 16)
        provider.has_hints(editor, None)
        response = provider.get_hints()
        assert response is not None
        assert response.anchor == Position(1, 14)

        editor.set_cursor(2, 0)
        provider.insert_hint(response.candidates[0])

        assert editor.document.text == "$gutter: 8px;\n.a { margin: $gutter  padding: 0; }"
        assert editor.document.text.count("margin") == 1
        assert editor.get_cursor() == Position(1, 20)

    def test_switching_editor_rebuilds_pool(self, provider, make_editor) -> None:
        first = make_editor("$alpha: 1;\n.x { c: $ }", 1, 9)
        second = make_editor("$beta: 1;\n.x { c: $ }", 1, 9)

        assert provider.has_hints(first, None)
        assert _names(provider.get_hints()) == ["alpha"]
        provider.session.reset()

        assert provider.has_hints(second, None)
        assert _names(provider.get_hints()) == ["beta"]


class TestSymbols:
    """Document-wide symbol listing."""

    def test_block_variables_excluded(self, provider, make_editor) -> None:
        provider.set_editor(make_editor("$a: 1;\n@mixin m { $b: 2; }\n$c: 3;"))
        assert [s.name for s in provider.symbols(SymbolKind.VARIABLE)] == ["a", "c"]

    def test_function_block_variables_excluded(self, provider, make_editor) -> None:
        text = "@function f($n) { $t: 2; @return $n; }\n$g: 1;"
        provider.set_editor(make_editor(text))
        assert [s.name for s in provider.symbols(SymbolKind.VARIABLE)] == ["g"]
