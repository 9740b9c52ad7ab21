from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from app.analysis.exceptions import AnalysisValidationError

EntityBag = dict[str, list[str]]
"""Entity category (date, money, ...) -> unique matched strings."""


class Category(str, Enum):
    """Closed set of supported document categories."""

    FINANCIAL = "Financial"
    LEGAL = "Legal"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Return the category for *value*.

        Raises:
            AnalysisValidationError: if *value* is not a supported category.
        """
        if isinstance(value, Category):
            return value
        try:
            return cls(value)
        except ValueError:
            supported = [c.value for c in cls]
            raise AnalysisValidationError(
                f"Unsupported document category {value!r}. Choose from: {supported}"
            ) from None


class ComplianceStatus(str, Enum):
    """Coarse compliance verdict. ERROR marks a checker failure."""

    PASS = "Pass"
    WARNING = "Warning"
    FAIL = "Fail"
    ERROR = "Error"

    @classmethod
    def from_missing_count(cls, missing: int) -> "ComplianceStatus":
        if missing == 0:
            return cls.PASS
        if missing == 1:
            return cls.WARNING
        return cls.FAIL


@dataclass(frozen=True)
class AnalysisOptions:
    """Independently gated analysis steps. Absent flags are False."""

    extract_info: bool = False
    summarize: bool = False
    anomaly_detection: bool = False
    compliance_check: bool = False

    # Upload form field names used by the web client.
    _ALIASES: ClassVar[dict[str, str]] = {
        "extractInfo": "extract_info",
        "summarize": "summarize",
        "anomalyDetection": "anomaly_detection",
        "complianceCheck": "compliance_check",
    }

    @property
    def any_enabled(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "AnalysisOptions":
        """Build options from a flat mapping of booleans.

        Accepts both snake_case field names and the camelCase form names.

        Raises:
            AnalysisValidationError: on unknown keys or non-boolean values.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise AnalysisValidationError("Processing options must be a mapping")
        known = {f.name for f in fields(cls)}
        values: dict[str, bool] = {}
        for key, value in raw.items():
            name = cls._ALIASES.get(key, key)
            if name not in known:
                raise AnalysisValidationError(f"Unknown processing option: {key!r}")
            if not isinstance(value, bool):
                raise AnalysisValidationError(
                    f"Processing option {key!r} must be a boolean, got {value!r}"
                )
            values[name] = value
        return cls(**values)


@dataclass(frozen=True)
class AnomalyItem:
    """A single flagged irregularity."""

    type: str
    confidence: int  # 70-100


@dataclass(frozen=True)
class AnomalyReport:
    """Output of the anomaly detector. ``detected`` mirrors ``bool(items)``."""

    detected: bool
    items: tuple[AnomalyItem, ...] = ()
    error: str | None = None

    @classmethod
    def from_items(cls, items: list[AnomalyItem]) -> "AnomalyReport":
        return cls(detected=bool(items), items=tuple(items))

    @classmethod
    def failed(cls, error: str) -> "AnomalyReport":
        return cls(detected=False, items=(), error=error)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "detected": self.detected,
            "items": [{"type": i.type, "confidence": i.confidence} for i in self.items],
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnomalyReport":
        items = tuple(
            AnomalyItem(type=i["type"], confidence=int(i["confidence"]))
            for i in data.get("items", [])
        )
        return cls(detected=bool(data.get("detected")), items=items, error=data.get("error"))


@dataclass(frozen=True)
class AnalysisRecord:
    """Analysis artifacts for one document.

    A field is None when its step was not requested or the document text
    could not be acquired.
    """

    summary: str | None = None
    extracted_data: EntityBag | None = None
    anomalies: AnomalyReport | None = None
    compliance_status: ComplianceStatus | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict. All four keys are always present."""
        return {
            "summary": self.summary,
            "extractedData": (
                {k: list(v) for k, v in self.extracted_data.items()}
                if self.extracted_data is not None
                else None
            ),
            "anomalies": self.anomalies.to_dict() if self.anomalies is not None else None,
            "complianceStatus": (
                self.compliance_status.value if self.compliance_status is not None else None
            ),
        }

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "AnalysisRecord":
        extracted = data.get("extractedData")
        anomalies = data.get("anomalies")
        status = data.get("complianceStatus")
        return cls(
            summary=data.get("summary"),
            extracted_data=(
                {k: list(v) for k, v in extracted.items()} if extracted is not None else None
            ),
            anomalies=AnomalyReport.from_dict(anomalies) if anomalies is not None else None,
            compliance_status=ComplianceStatus(status) if status is not None else None,
        )


@dataclass(frozen=True)
class StoredRecord:
    """An analysis record as persisted by the record sink."""

    id: int
    document_id: int
    owner_id: int
    category: Category
    record: AnalysisRecord
    created_at: datetime


@dataclass(frozen=True)
class CategoryDiff:
    """Entity values added in the second document and removed from the first."""

    additions: list[str] = field(default_factory=list)
    removals: list[str] = field(default_factory=list)


class SimilarityVerdict(str, Enum):
    """Banded reading of a similarity score."""

    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"

    @classmethod
    def from_score(cls, score: float) -> "SimilarityVerdict":
        if score > 80:
            return cls.HIGH
        if score > 50:
            return cls.MODERATE
        return cls.LOW

    @property
    def headline(self) -> str:
        return _VERDICT_TEXT[self][0]

    @property
    def recommendation(self) -> str:
        return _VERDICT_TEXT[self][1]


_VERDICT_TEXT: dict[SimilarityVerdict, tuple[str, str]] = {
    SimilarityVerdict.HIGH: (
        "The documents are highly similar.",
        "These documents are very similar. Any differences are likely minor "
        "and may not be significant.",
    ),
    SimilarityVerdict.MODERATE: (
        "The documents have moderate similarities.",
        "These documents have notable differences. Review the specific changes "
        "highlighted above.",
    ),
    SimilarityVerdict.LOW: (
        "The documents are significantly different.",
        "These documents are substantially different. A detailed review is recommended.",
    ),
}


@dataclass(frozen=True)
class ComparisonResult:
    """Transient result of comparing two documents. Never persisted."""

    document_refs: tuple[int, int]
    similarity_score: float
    differences: dict[str, CategoryDiff] = field(default_factory=dict)

    @property
    def verdict(self) -> SimilarityVerdict:
        return SimilarityVerdict.from_score(self.similarity_score)

    def to_payload(self) -> dict[str, Any]:
        verdict = self.verdict
        return {
            "documentRefs": list(self.document_refs),
            "similarityScore": self.similarity_score,
            "differences": {
                category: {"additions": list(d.additions), "removals": list(d.removals)}
                for category, d in self.differences.items()
            },
            "verdict": {
                "level": verdict.value,
                "headline": verdict.headline,
                "recommendation": verdict.recommendation,
            },
        }
