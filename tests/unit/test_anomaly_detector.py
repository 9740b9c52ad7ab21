import random

import pytest

from app.analysis.anomaly_detector import AnomalyDetector, fixed_confidence, uniform_confidence
from app.analysis.exceptions import AnomalyDetectionError
from app.analysis.models import AnomalyItem, Category


def _detector(confidence: int = 85) -> AnomalyDetector:
    return AnomalyDetector(confidence_source=fixed_confidence(confidence))


class TestFinancialRules:
    def test_reports_single_matched_rule(self) -> None:
        report = _detector().detect("An unauthorized charge appeared.", Category.FINANCIAL)

        assert report.detected is True
        assert report.items == (AnomalyItem(type="Unauthorized Transaction", confidence=85),)

    def test_items_follow_rule_order_not_text_order(self) -> None:
        report = _detector().detect(
            "Mismatched figures, an overpayment and an unauthorized debit.",
            Category.FINANCIAL,
        )
        assert [i.type for i in report.items] == [
            "Unauthorized Transaction",
            "Overpayment",
            "Mismatched Figures",
        ]

    def test_no_match_is_not_detected(self) -> None:
        report = _detector().detect("Everything reconciles.", Category.FINANCIAL)
        assert report.detected is False
        assert report.items == ()

    def test_requires_whole_word(self) -> None:
        report = _detector().detect("Inconsistently formatted.", Category.FINANCIAL)
        assert report.detected is False

    def test_accepts_category_string(self) -> None:
        report = _detector().detect("underpayment", "Financial")
        assert [i.type for i in report.items] == ["Underpayment"]


class TestLegalRules:
    def test_reports_all_legal_rules(self) -> None:
        text = (
            "This unenforceable and contradictory clause is VOID; "
            "prohibited and illegal terms follow."
        )
        report = _detector().detect(text, Category.LEGAL)
        assert [i.type for i in report.items] == [
            "Unenforceable Clause",
            "Contradictory Terms",
            "Potentially Void Clause",
            "Prohibited Terms",
            "Potentially Illegal Terms",
        ]

    def test_substring_of_other_word_does_not_match(self) -> None:
        report = _detector().detect("Parties shall avoid delays.", Category.LEGAL)
        assert report.detected is False

    def test_financial_keywords_are_ignored_for_legal(self) -> None:
        report = _detector().detect("unauthorized overpayment", Category.LEGAL)
        assert report.detected is False


class TestUnknownCategory:
    def test_unknown_category_yields_empty_report(self) -> None:
        report = _detector().detect("unauthorized void", "Medical")
        assert report.detected is False
        assert report.items == ()


class TestConfidence:
    def test_default_confidence_is_within_range(self) -> None:
        detector = AnomalyDetector()
        for _ in range(50):
            report = detector.detect("unauthorized", Category.FINANCIAL)
            assert 70 <= report.items[0].confidence <= 100

    def test_seeded_source_is_reproducible(self) -> None:
        first = AnomalyDetector(uniform_confidence(random.Random(7)))
        second = AnomalyDetector(uniform_confidence(random.Random(7)))
        text = "unauthorized inconsistent overpayment"

        assert first.detect(text, Category.FINANCIAL) == second.detect(text, Category.FINANCIAL)

    @pytest.mark.parametrize("value", [69, 101])
    def test_out_of_range_confidence_raises(self, value: int) -> None:
        with pytest.raises(AnomalyDetectionError, match="outside"):
            _detector(value).detect("unauthorized", Category.FINANCIAL)

    def test_confidence_not_drawn_without_matches(self) -> None:
        calls: list[int] = []

        def source() -> int:
            calls.append(1)
            return 90

        AnomalyDetector(source).detect("clean", Category.FINANCIAL)
        assert calls == []


class TestErrors:
    def test_non_text_input_raises(self) -> None:
        with pytest.raises(AnomalyDetectionError, match="Anomaly detection failed"):
            _detector().detect(None, Category.FINANCIAL)  # type: ignore[arg-type]
