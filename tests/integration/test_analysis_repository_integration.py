import pytest

from app.analysis.models import AnalysisRecord, Category, ComplianceStatus
from app.database.exceptions import RecordAlreadyExistsError
from app.database.repositories.analysis_repository import AnalysisRepository


@pytest.mark.integration
class TestAnalysisRepository:
    def test_save_then_find_by_document(
        self, seed_document: tuple[int, str], owner_id: int
    ) -> None:
        record = AnalysisRecord(
            summary="Quarterly statement.",
            extracted_data={"money": ["$12,500.00"]},
            compliance_status=ComplianceStatus.FAIL,
        )
        repo = AnalysisRepository()

        stored = repo.save(
            record, owner_id, document_id=seed_document[0], category=Category.FINANCIAL
        )
        found = repo.find_by_document(seed_document[0])

        assert found is not None
        assert found.id == stored.id
        assert found.record == record
        assert found.category is Category.FINANCIAL

    def test_second_save_for_same_document_is_rejected(
        self, seed_document: tuple[int, str], owner_id: int
    ) -> None:
        repo = AnalysisRepository()
        repo.save(
            AnalysisRecord(), owner_id, document_id=seed_document[0], category=Category.LEGAL
        )

        with pytest.raises(RecordAlreadyExistsError):
            repo.save(
                AnalysisRecord(summary="again"),
                owner_id,
                document_id=seed_document[0],
                category=Category.LEGAL,
            )

        found = repo.find_by_document(seed_document[0])
        assert found is not None
        assert found.record == AnalysisRecord()
