import re
from collections import Counter

_WHITESPACE_RE = re.compile(r"\s+")
# Unicode-aware: accented letters stay inside words.
_NON_WORD_RE = re.compile(r"\W+")


class SimilarityScorer:
    """Weighted Jaccard similarity over word multisets, as a percentage.

    Bag-of-words overlap: word order and synonymy are ignored.
    """

    def score(self, text_a: str, text_b: str) -> float:
        """Return ``sum(min) / sum(max) * 100`` rounded to 2 decimals, 0.0 if both are empty."""
        counts_a = self._word_counts(text_a)
        counts_b = self._word_counts(text_b)

        vocabulary = counts_a.keys() | counts_b.keys()
        intersection = sum(min(counts_a[w], counts_b[w]) for w in vocabulary)
        union = sum(max(counts_a[w], counts_b[w]) for w in vocabulary)
        if union == 0:
            return 0.0
        return round(intersection / union * 100, 2)

    @staticmethod
    def _normalize(text: str) -> str:
        return _WHITESPACE_RE.sub(" ", text.lower()).strip()

    @classmethod
    def _word_counts(cls, text: str) -> Counter[str]:
        return Counter(t for t in _NON_WORD_RE.split(cls._normalize(text)) if t)
