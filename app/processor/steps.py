from app.analysis.analyzer import DocumentAnalyzer
from app.analysis.base import RecordSink
from app.analysis.models import AnalysisOptions, Category
from app.database.repositories.documents_repository import DocumentsRepository
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.processor.pipeline import PipelineContext, PipelineStep


class MarkProcessingStep(PipelineStep):
    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._job_repo.mark_processing(context.job_id)
        Log.info(f"Job {context.job_id} marked as processing")
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document = self._doc_repo.find_by_id(context.document_id)
        Log.info(
            f"Loaded document {context.document_id} '{context.document.name}' "
            f"({context.document.mime_type})"
        )
        return context


class ValidateRequestStep(PipelineStep):
    """Rejects unsupported categories and malformed options before analysis."""

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before validation")
        context.category = Category.parse(context.document.category)
        context.options = AnalysisOptions.from_mapping(context.document.options)
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: DocumentAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.category is None or context.options is None:
            raise ValueError("PipelineContext.category and options must be set before analysis")
        context.record = self._analyzer.analyze(
            context.document_id, context.options, context.category
        )
        return context


class PersistAnalysisStep(PipelineStep):
    def __init__(self, record_sink: RecordSink) -> None:
        self._record_sink = record_sink

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None or context.document is None or context.category is None:
            raise ValueError("PipelineContext.record must be set before persist")
        context.stored_record = self._record_sink.save(
            context.record,
            context.document.user_id,
            document_id=context.document_id,
            category=context.category,
        )
        Log.info(
            f"Stored analysis {context.stored_record.id} for document {context.document_id}"
        )
        return context
