"""Tests for HintsController host event wiring."""

from pathlib import Path

import pytest

from sass_hints.core.config import ConfigStore, HintsConfig
from sass_hints.hints.controller import HintsController
from sass_hints.hints.provider import SassHintProvider
from sass_hints.host import InMemoryDocument

MAIN = Path("/proj/main.scss")


@pytest.fixture
def controller(memory_fs) -> HintsController:
    return HintsController(SassHintProvider(fs=memory_fs))


class TestActiveEditorChanged:
    """Tests for on_active_editor_changed()."""

    @pytest.mark.asyncio
    async def test_attaches_and_scans(self, controller, make_editor) -> None:
        editor = make_editor('@import "vars";\n', path=MAIN)

        assert await controller.on_active_editor_changed(editor) is True

        provider = controller.provider
        assert provider.editor is editor
        assert controller.listening_for_saves
        assert [s.name for s in provider.cache.variables] == ["primary", "gutter"]
        assert provider.cache.functions

    @pytest.mark.asyncio
    async def test_unsupported_language(self, controller, make_editor) -> None:
        editor = make_editor("a { color: red; }", language_id="css")
        assert await controller.on_active_editor_changed(editor) is False
        assert controller.provider.editor is None
        assert not controller.listening_for_saves

    @pytest.mark.asyncio
    async def test_no_editor(self, controller) -> None:
        assert await controller.on_active_editor_changed(None) is False

    @pytest.mark.asyncio
    async def test_disabled(self, memory_fs, make_editor) -> None:
        provider = SassHintProvider(ConfigStore(HintsConfig(enabled=False)), memory_fs)
        controller = HintsController(provider)
        assert await controller.on_active_editor_changed(make_editor("", path=MAIN)) is False

    @pytest.mark.asyncio
    async def test_switching_documents_clears_caches(self, controller, make_editor) -> None:
        await controller.on_active_editor_changed(make_editor('@import "vars";', path=MAIN))
        other = make_editor('@import "mixins";', path=Path("/proj/other.scss"))
        await controller.on_active_editor_changed(other)
        assert [s.name for s in controller.provider.cache.variables] == ["radius"]


class TestDocumentSaved:
    """Tests for on_document_saved()."""

    @pytest.mark.asyncio
    async def test_active_document_rescanned(self, controller, make_editor) -> None:
        editor = make_editor('@import "vars";\n', path=MAIN)
        await controller.on_active_editor_changed(editor)

        editor.document.text = '@import "vars";\n@import "mixins";\n'
        assert await controller.on_document_saved(editor.document) is True
        assert [s.name for s in controller.provider.cache.mixins] == ["clearfix"]

    @pytest.mark.asyncio
    async def test_unchanged_active_document_not_rebuilt(self, controller, make_editor) -> None:
        editor = make_editor('@import "vars";\n', path=MAIN)
        await controller.on_active_editor_changed(editor)
        assert await controller.on_document_saved(editor.document) is False

    @pytest.mark.asyncio
    async def test_imported_file_rebuilds(self, controller, memory_fs, make_editor) -> None:
        editor = make_editor('@import "vars";\n', path=MAIN)
        await controller.on_active_editor_changed(editor)

        vars_path = Path("/proj/_vars.scss")
        memory_fs.files[vars_path] = "$accent: blue;\n"
        saved = InMemoryDocument("$accent: blue;\n", path=vars_path)

        assert await controller.on_document_saved(saved) is True
        assert [s.name for s in controller.provider.cache.variables] == ["accent"]

    @pytest.mark.asyncio
    async def test_unrelated_file_ignored(self, controller, make_editor) -> None:
        await controller.on_active_editor_changed(make_editor('@import "vars";', path=MAIN))
        unrelated = InMemoryDocument("$z: 1;", path=Path("/elsewhere/z.scss"))
        assert await controller.on_document_saved(unrelated) is False

    @pytest.mark.asyncio
    async def test_not_listening(self, controller) -> None:
        document = InMemoryDocument("", path=MAIN)
        assert await controller.on_document_saved(document) is False
