"""Host event wiring for the provider.

Routes active-editor changes and document saves to the provider, limited to
supported languages and to the ``enabled`` option.
"""

from __future__ import annotations

import logging

from sass_hints.host import Document, Editor
from sass_hints.hints.provider import SassHintProvider
from sass_hints.index.imports import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)


class HintsController:
    """Keeps a provider attached to the active SCSS editor.

    Args:
        provider: Provider to drive.

    """

    def __init__(self, provider: SassHintProvider) -> None:  # noqa: D107
        self.provider = provider
        self.listening_for_saves = False

    def supports(self, editor: Editor | None) -> bool:
        """Return True if editor holds a document of a supported language."""
        return editor is not None and editor.document.language_id in SUPPORTED_LANGUAGES

    async def on_active_editor_changed(self, editor: Editor | None) -> bool:
        """Attach to a newly focused editor.

        Returns:
            True if the provider was attached and the imports scanned.

        """
        if not self.provider.config.current.enabled:
            self.listening_for_saves = False
            return False

        if not self.supports(editor):
            if self.listening_for_saves:
                logger.debug("Active editor not supported, detaching")
            self.listening_for_saves = False
            return False

        assert editor is not None
        self.listening_for_saves = True
        self.provider.clear_cache()
        self.provider.set_editor(editor)
        await self.provider.activate()
        return True

    async def on_document_saved(self, document: Document) -> bool:
        """Refresh import caches after a save.

        Saving the active document rescans its imports. Saving one of the
        files it imports forces a rebuild so edited declarations show up.

        Returns:
            True if the caches were rebuilt.

        """
        editor = self.provider.editor
        if not self.listening_for_saves or editor is None:
            return False

        builder = self.provider.builder
        if document is editor.document:
            return await builder.rescan(document)

        if document.path is not None and document.path in builder.cache.handles:
            logger.info("Imported file %s saved, rebuilding caches", document.path)
            builder.invalidate()
            rebuilt = await builder.rescan(editor.document)
            builder.ensure_builtins()
            return rebuilt

        return False
