from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.analysis.models import AnalysisOptions, AnalysisRecord, Category, StoredRecord
from app.processor.models import UploadedDocument


@dataclass(slots=True)
class PipelineContext:
    """State handed from step to step while one analysis job runs."""

    document_id: int
    job_id: int
    document: UploadedDocument | None = None
    category: Category | None = None
    options: AnalysisOptions | None = None
    record: AnalysisRecord | None = None
    stored_record: StoredRecord | None = None


class PipelineStep(ABC):
    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
