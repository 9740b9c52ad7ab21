from collections.abc import Iterable
from dataclasses import dataclass

from app.analysis.models import Category, ComplianceStatus, StoredRecord


@dataclass(frozen=True)
class DocumentStats:
    """Aggregate figures over a user's analyzed documents."""

    total: int = 0
    financial: int = 0
    legal: int = 0
    compliant: int = 0
    with_anomalies: int = 0
    compliance_rate: int = 0  # percent of all documents with status Pass


def summarize_documents(records: Iterable[StoredRecord]) -> DocumentStats:
    """Count documents by category, compliance and anomaly findings."""
    total = financial = legal = compliant = with_anomalies = 0
    for stored in records:
        total += 1
        if stored.category is Category.FINANCIAL:
            financial += 1
        elif stored.category is Category.LEGAL:
            legal += 1
        if stored.record.compliance_status is ComplianceStatus.PASS:
            compliant += 1
        if stored.record.anomalies is not None and stored.record.anomalies.detected:
            with_anomalies += 1

    return DocumentStats(
        total=total,
        financial=financial,
        legal=legal,
        compliant=compliant,
        with_anomalies=with_anomalies,
        compliance_rate=round(compliant / total * 100) if total else 0,
    )
