"""Grouping of resolved obligations into notice sections.

Section order reproduces the reference notices: libraries are taken in
the order traversal first discovered them, and each library contributes
its not-yet-emitted sections, most installed paths first. Ties fall back
to a category precedence list and then to the license text identifier.
"""
from __future__ import annotations

import logging
from typing import Optional

from license_notice.models.config import DEFAULT_SECTION_PRECEDENCE
from license_notice.models.graph import Category
from license_notice.models.resolution import LibraryBlock, NoticeSection, Resolution

logger = logging.getLogger(__name__)

SectionKey = tuple[Category, str]


class NoticeGrouper:
    """Groups resolutions into an ordered sequence of notice sections."""

    def __init__(self, precedence: Optional[list[Category]] = None) -> None:
        """Initialize grouper.

        Args:
            precedence: Category tie-break order. Categories not listed
                sort after listed ones, in declaration order.
        """
        order = list(precedence) if precedence else list(DEFAULT_SECTION_PRECEDENCE)
        order.extend(category for category in Category if category not in order)
        self._rank = {category: index for index, category in enumerate(order)}

    def group(self, resolutions: list[Resolution]) -> list[NoticeSection]:
        """Group resolutions into notice sections.

        Args:
            resolutions: Resolutions in traversal-discovery order.

        Returns:
            Ordered list of NoticeSection.
        """
        sections: dict[SectionKey, NoticeSection] = {}
        library_order: dict[str, int] = {}
        # installed paths per library per section, for ordering
        library_sections: dict[str, dict[SectionKey, int]] = {}

        for resolution in resolutions:
            key = resolution.section_key
            library_order.setdefault(resolution.library, len(library_order))

            section = sections.get(key)
            if section is None:
                section = NoticeSection(
                    category=resolution.category,
                    license_text=resolution.license_text,
                )
                sections[key] = section

            block = section.block_for(resolution.library)
            if block is None:
                block = LibraryBlock(library=resolution.library)
                section.blocks.append(block)
            block.add(resolution.install_path)

            counts = library_sections.setdefault(resolution.library, {})
            counts[key] = len(block.install_paths)

        for section in sections.values():
            section.blocks.sort(key=lambda b: library_order[b.library])

        ordered: list[NoticeSection] = []
        emitted: set[SectionKey] = set()
        for library in library_order:
            counts = library_sections[library]
            pending = [key for key in counts if key not in emitted]
            pending.sort(key=lambda k: (-counts[k], self._rank[k[0]], k[1]))
            for key in pending:
                emitted.add(key)
                ordered.append(sections[key])

        logger.debug(
            "grouped %d resolutions into %d section(s)", len(resolutions), len(ordered)
        )
        return ordered
