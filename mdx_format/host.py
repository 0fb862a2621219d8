"""Adapter between an editor host and the formatting engine."""

from __future__ import annotations

from collections.abc import Callable

from .config import FormatterConfig
from .constants import DATA_LANGUAGES
from .formatter import format_text
from .models import FormatOptions, TextEdit


def apply_edits(text: str, edits: list[TextEdit]) -> str:
    """Apply non-overlapping edits to `text`.

    Examples:
        apply_edits("abc", [TextEdit(1, 2, "X")])  # "aXc"
    """
    for edit in sorted(edits, key=lambda edit: edit.start, reverse=True):
        text = text[: edit.start] + edit.new_text + text[edit.end :]
    return text


class FormattingProvider:
    """Produce whole-document edits for an editor host.

    The enable flag is read before every request, so a host can toggle
    formatting without rebuilding the provider.

    Args:
        is_enabled: Returns the current enable flag. Formatting is always
            enabled when omitted.
        notify: Receives a message when a formatting pass fails.
        data_languages: Code fence languages pretty-printed as JSON.
    """

    def __init__(
        self,
        is_enabled: Callable[[], bool] | None = None,
        notify: Callable[[str], None] | None = None,
        data_languages: tuple[str, ...] = DATA_LANGUAGES,
    ):
        self.is_enabled = is_enabled
        self.notify = notify
        self.data_languages = data_languages

    @classmethod
    def from_config(
        cls, config: FormatterConfig, notify: Callable[[str], None] | None = None
    ) -> FormattingProvider:
        return cls(
            is_enabled=lambda: config.enable,
            notify=notify,
            data_languages=config.data_languages,
        )

    def provide_edits(self, document_text: str, options: FormatOptions) -> list[TextEdit]:
        """Return the edits that bring `document_text` into canonical form.

        Args:
            document_text: Snapshot of the whole document.
            options: Indentation preferences of the host.

        Returns:
            list[TextEdit]: Empty when formatting is disabled, the document is
                already canonical, or the pass failed; otherwise one edit
                replacing the whole document.
        """
        enabled = self.is_enabled() if self.is_enabled is not None else True
        result = format_text(
            document_text, options, enabled=enabled, data_languages=self.data_languages
        )

        if result.error is not None:
            if self.notify is not None:
                self.notify(f"MDX Formatter Error: {result.error}")
            return []

        if not result.changed:
            return []

        return [TextEdit(start=0, end=len(document_text), new_text=result.text)]

    def format_now(self, document_text: str, options: FormatOptions | None = None) -> str:
        """Format a document on demand and return the updated text."""
        edits = self.provide_edits(document_text, options or FormatOptions())
        return apply_edits(document_text, edits)
