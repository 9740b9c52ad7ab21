from pathlib import Path

from app.analysis.analyzer import DocumentAnalyzer
from app.analysis.factory import AnalyzerFactory
from app.config.settings import Settings
from app.database.repositories.analysis_repository import AnalysisRepository
from app.database.repositories.documents_repository import DocumentsRepository
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.pdf.factory import PdfExtractorFactory
from app.processor.file_loader import FileLoader
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    AnalyzeStep,
    LoadDocumentStep,
    MarkProcessingStep,
    PersistAnalysisStep,
    ValidateRequestStep,
)
from app.processor.text_source import StoredDocumentTextSource


class Processor:
    """Runs the ingestion pipeline for one document.

    Pipeline: mark processing -> load -> validate -> analyze -> persist.
    A step error is logged with the failing step name and re-raised as is.
    The failed or pending transition belongs to the JobRunner.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(self, document_id: int, job_id: int) -> PipelineContext:
        """Run every step in order for *document_id* under *job_id*."""
        Log.info(f"Processing document {document_id} for job {job_id}")
        context = PipelineContext(document_id=document_id, job_id=job_id)
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(
                    f"{step.name} failed for document {document_id}: {exc}",
                    job_id=job_id,
                    step=step.name,
                )
                raise
            Log.debug(f"{step.name} done", job_id=job_id)
        return context


def build_analyzer(settings: Settings, files_root: Path | None = None) -> DocumentAnalyzer:
    """Build a DocumentAnalyzer reading documents from local storage."""
    text_source = StoredDocumentTextSource(
        doc_repo=DocumentsRepository(),
        file_loader=FileLoader(files_root=files_root or settings.files_root),
        pdf_extractor=PdfExtractorFactory.create(settings),
    )
    return AnalyzerFactory.create(settings, text_source)


def build_processor(
    settings: Settings,
    job_repo: JobRepository,
    files_root: Path | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    doc_repo = DocumentsRepository()
    steps: list[PipelineStep] = [
        MarkProcessingStep(job_repo),
        LoadDocumentStep(doc_repo),
        ValidateRequestStep(),
        AnalyzeStep(build_analyzer(settings, files_root)),
        PersistAnalysisStep(AnalysisRepository()),
    ]
    return Processor(steps=steps)
