"""Pattern-based entity extraction.

Five fixed, case-insensitive patterns are applied to the whole text. All
non-overlapping matches are collected per category and deduplicated.
Categories without matches are left out of the result.
"""

import re
from typing import ClassVar

from app.analysis.exceptions import ExtractionError
from app.analysis.models import EntityBag
from app.logging.logger import Log

_MONTHS = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"


class EntityExtractor:
    """Pulls dates, money amounts, percentages, emails and phone numbers out of text."""

    _DATE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b(?:"
        r"\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}"
        rf"|\d{{1,2}}(?:st|nd|rd|th)? (?:{_MONTHS})[a-z]* \d{{2,4}}"
        r"|\d{4}[/.-]\d{1,2}[/.-]\d{1,2}"
        r")\b",
        re.IGNORECASE,
    )
    _MONEY_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\$\s?[0-9,]+(?:\.\d{2})?"
        r"|\b\d+(?:\.\d{2})?\s?(?:dollars|USD)\b",
        re.IGNORECASE,
    )
    _PERCENTAGE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b\d+(?:\.\d+)?%",
        re.IGNORECASE,
    )
    _EMAIL_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
        re.IGNORECASE,
    )
    _PHONE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b(?:\+\d{1,2}\s)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b",
        re.IGNORECASE,
    )

    _PATTERNS: ClassVar[list[tuple[str, re.Pattern[str]]]] = [
        ("date", _DATE_RE),
        ("money", _MONEY_RE),
        ("percentage", _PERCENTAGE_RE),
        ("email", _EMAIL_RE),
        ("phone", _PHONE_RE),
    ]

    def extract(self, text: str) -> EntityBag:
        """Return the unique matches per entity category.

        Raises:
            ExtractionError: if *text* cannot be scanned.
        """
        try:
            return self._run(text)
        except Exception as exc:
            raise ExtractionError(f"Entity extraction failed: {exc}") from exc

    def _run(self, text: str) -> EntityBag:
        entities: EntityBag = {}
        for category, pattern in self._PATTERNS:
            matches = [m.group(0) for m in pattern.finditer(text)]
            if matches:
                entities[category] = list(dict.fromkeys(matches))
        Log.debug(
            "Extracted entities: "
            + ", ".join(f"{k}={len(v)}" for k, v in entities.items())
        )
        return entities
