"""Ordered pattern chain pulling a task title out of a creation request."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from dobot_engine.core.models import NO_MATCH, ExtractionResult, Title


@dataclass(frozen=True, slots=True)
class TitleExtractor:
    """A named pattern whose first group captures the title."""

    name: str
    pattern: re.Pattern[str]

    def extract(self, message: str) -> str | None:
        match = self.pattern.search(message)
        return match.group(1) if match else None


def _quoted_after(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"{keyword}.*?[\"']([^\"']+)[\"']", re.IGNORECASE)


def _line_after(prefix: str) -> re.Pattern[str]:
    # The atomic group keeps a dangling colon from being captured as the title.
    return re.compile(rf"{prefix}(?>[ \t]*:?)[ \t]*(.+)$", re.IGNORECASE | re.MULTILINE)


TITLE_EXTRACTORS: tuple[TitleExtractor, ...] = (
    TitleExtractor("quoted-after-crear", _quoted_after("crear")),
    TitleExtractor("quoted-after-create", _quoted_after("create")),
    TitleExtractor("line-after-nueva-tarea", _line_after("nueva tarea")),
    TitleExtractor("line-after-new-task", _line_after("new task")),
    TitleExtractor("quoted-after-agregar", _quoted_after("agregar")),
    TitleExtractor("quoted-after-add", _quoted_after("add")),
)


def extract_task_title(
    message: str, extractors: Sequence[TitleExtractor] = TITLE_EXTRACTORS
) -> ExtractionResult:
    """Try each extractor in order and return the first non-blank title.

    A capture that is blank once trimmed does not count as a success; the
    chain moves on to the next extractor.

    Patterns are case-insensitive and run against the raw message, so the
    title keeps the casing the user typed.
    """
    for extractor in extractors:
        raw = extractor.extract(message)
        if raw is None:
            continue
        title = raw.strip()
        if title:
            return Title(title)
    return NO_MATCH


__all__ = ["TitleExtractor", "TITLE_EXTRACTORS", "extract_task_title"]
