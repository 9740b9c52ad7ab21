import random
from collections.abc import Callable

from app.analysis.exceptions import AnomalyDetectionError
from app.analysis.models import AnomalyItem, AnomalyReport, Category
from app.analysis.rules import ANOMALY_RULES, RuleTable
from app.logging.logger import Log

ConfidenceSource = Callable[[], int]

MIN_CONFIDENCE = 70
MAX_CONFIDENCE = 100


def uniform_confidence(rng: random.Random | None = None) -> ConfidenceSource:
    """Confidence source drawing integers uniformly from [70, 100]."""
    generator = rng if rng is not None else random.Random()
    return lambda: generator.randint(MIN_CONFIDENCE, MAX_CONFIDENCE)


def fixed_confidence(value: int) -> ConfidenceSource:
    """Confidence source that always returns *value*. Useful in tests."""
    return lambda: value


class AnomalyDetector:
    """Flags red-flag keywords for a document category.

    One item is reported per matched rule, in rule-table order.
    """

    def __init__(
        self,
        confidence_source: ConfidenceSource | None = None,
        rules: RuleTable = ANOMALY_RULES,
    ) -> None:
        self._confidence = confidence_source or uniform_confidence()
        self._rules = rules

    def detect(self, text: str, category: Category | str) -> AnomalyReport:
        """Scan *text* with the rules of *category*.

        A category without a rule table yields an empty, undetected report.

        Raises:
            AnomalyDetectionError: if the confidence source misbehaves or
                scanning fails.
        """
        rules = self._rules.get(category, ())
        if not rules:
            Log.warning(f"No anomaly rules for category {category!r}")
        items: list[AnomalyItem] = []
        try:
            for rule in rules:
                if rule.matches(text):
                    items.append(AnomalyItem(type=rule.label, confidence=self._draw()))
        except AnomalyDetectionError:
            raise
        except Exception as exc:
            raise AnomalyDetectionError(f"Anomaly detection failed: {exc}") from exc
        return AnomalyReport.from_items(items)

    def _draw(self) -> int:
        value = self._confidence()
        if not isinstance(value, int) or not MIN_CONFIDENCE <= value <= MAX_CONFIDENCE:
            raise AnomalyDetectionError(
                f"Confidence {value!r} outside [{MIN_CONFIDENCE}, {MAX_CONFIDENCE}]"
            )
        return value
