import math
import re

from app.analysis.exceptions import NothingToSummarizeError

_SENTENCE_END_RE = re.compile(r"[.!?]+")


class Summarizer:
    """Extractive summarizer: keeps the leading fraction of sentences verbatim."""

    def __init__(self, ratio: float = 0.2) -> None:
        if not 0 < ratio <= 1:
            raise ValueError(f"Summary ratio must be in (0, 1], got {ratio}")
        self._ratio = ratio

    def summarize(self, text: str) -> str:
        """Return the first ``max(1, floor(n * ratio))`` sentences joined by ". ".

        Raises:
            NothingToSummarizeError: if *text* holds no sentences.
        """
        sentences = self.split_sentences(text)
        if not sentences:
            raise NothingToSummarizeError("Nothing to summarize: text has no sentences")
        target = max(1, math.floor(len(sentences) * self._ratio))
        return ". ".join(sentences[:target]) + "."

    @staticmethod
    def split_sentences(text: str) -> list[str]:
        # Stripped: joined sentences get exactly one space, not their leading whitespace.
        return [s.strip() for s in _SENTENCE_END_RE.split(text) if s.strip()]
