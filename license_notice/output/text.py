"""Text notice formatter.

Produces the line-oriented notice report: a horizontal rule before each
section, one "<Library> used by:" block per library with its indented
installed paths, and the section's category marker followed by the
license text body when one is available.
"""
from __future__ import annotations

from typing import Mapping, Optional

from license_notice.constants import HORIZONTAL_RULE, USED_BY_INDENT
from license_notice.models.resolution import NoticeSection


class TextNoticeFormatter:
    """Format notice sections as plain text."""

    def __init__(
        self,
        texts: Optional[Mapping[str, str]] = None,
        title: Optional[str] = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            texts: License text bodies keyed by license text identifier.
            title: Optional title printed before the first section.
        """
        self._texts = texts or {}
        self._title = title

    def format_sections(self, sections: list[NoticeSection]) -> str:
        """Format sections as a text notice.

        Args:
            sections: Ordered notice sections.

        Returns:
            The notice report; empty when there are no sections and no title.
        """
        lines: list[str] = []

        if self._title:
            lines.append(self._title)
            lines.append("")

        for section in sections:
            lines.extend(self._format_section(section))

        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def _format_section(self, section: NoticeSection) -> list[str]:
        """Format a single section.

        Args:
            section: Section to format.

        Returns:
            Lines of the section.
        """
        lines = [HORIZONTAL_RULE]
        for block in section.blocks:
            lines.append(f"{block.library} used by:")
            for install_path in block.install_paths:
                lines.append(f"{USED_BY_INDENT}{install_path}")
            lines.append("")

        lines.append(section.category.marker)
        text = self._texts.get(section.license_text) if section.license_text else None
        if text:
            lines.append(text.rstrip("\n"))
        lines.append("")
        return lines
