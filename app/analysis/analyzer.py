"""Analysis orchestration: single-document analysis and pairwise comparison.

analyze:  fetch text -> extract / summarize / detect / check -> AnalysisRecord
compare:  fetch both texts (concurrently) -> similarity + entity diff -> ComparisonResult

Every enabled step runs independently. A failing step degrades to its own
sentinel value and never aborts the other steps. Unavailable text degrades
the whole record to all-None fields. Validation and comparison failures are
raised to the caller.
"""

import time
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, ClassVar, TypeVar

from app.analysis.anomaly_detector import AnomalyDetector
from app.analysis.base import TextSource
from app.analysis.compliance_checker import ComplianceChecker
from app.analysis.differ import InformationDiffer
from app.analysis.entity_extractor import EntityExtractor
from app.analysis.exceptions import (
    AcquisitionError,
    ComparisonError,
    ComponentError,
    TextUnavailableError,
)
from app.analysis.models import (
    AnalysisOptions,
    AnalysisRecord,
    AnomalyReport,
    Category,
    ComparisonResult,
    ComplianceStatus,
    EntityBag,
)
from app.analysis.similarity import SimilarityScorer
from app.analysis.summarizer import Summarizer
from app.logging.logger import Log

T = TypeVar("T")

OptionsInput = AnalysisOptions | Mapping[str, Any] | None


class DocumentAnalyzer:
    """Runs the analysis components over document text."""

    SUMMARY_ERROR: ClassVar[str] = "Error summarizing document"
    ANOMALY_ERROR: ClassVar[str] = "Error detecting anomalies"

    def __init__(
        self,
        *,
        text_source: TextSource,
        extractor: EntityExtractor,
        summarizer: Summarizer,
        anomaly_detector: AnomalyDetector,
        compliance_checker: ComplianceChecker,
        similarity_scorer: SimilarityScorer,
        differ: InformationDiffer,
        fetch_timeout_seconds: float = 10.0,
    ) -> None:
        self._text_source = text_source
        self._extractor = extractor
        self._summarizer = summarizer
        self._anomaly_detector = anomaly_detector
        self._compliance_checker = compliance_checker
        self._similarity_scorer = similarity_scorer
        self._differ = differ
        self._fetch_timeout = fetch_timeout_seconds

    # ------------------------------------------------------------------
    # Single document
    # ------------------------------------------------------------------

    def analyze(
        self,
        document_ref: int,
        options: OptionsInput,
        category: Category | str,
    ) -> AnalysisRecord:
        """Fetch the document text and run the enabled steps over it.

        Raises:
            AnalysisValidationError: for an unsupported category or malformed
                options. Raised before the text source is consulted.
        """
        category = Category.parse(category)
        options = self._coerce_options(options)
        if not options.any_enabled:
            Log.info(f"No analysis requested for document {document_ref}")
            return AnalysisRecord()

        try:
            (text,) = self._fetch_texts([document_ref])
        except AcquisitionError as exc:
            Log.warning(f"Skipping analysis of document {document_ref}: {exc}")
            return AnalysisRecord()

        Log.info(f"Analyzing document {document_ref} ({len(text)} chars, {category.value})")
        return self._run_steps(text, options, category)

    def analyze_text(
        self,
        text: str | None,
        options: OptionsInput,
        category: Category | str,
    ) -> AnalysisRecord:
        """Run the enabled steps over already acquired *text*.

        Raises:
            AnalysisValidationError: for an unsupported category or malformed options.
        """
        category = Category.parse(category)
        options = self._coerce_options(options)
        return self._run_steps(text, options, category)

    def _run_steps(
        self,
        text: str | None,
        options: AnalysisOptions,
        category: Category,
    ) -> AnalysisRecord:
        if not text or not text.strip():
            Log.warning("Document text is empty, all analysis steps skipped")
            return AnalysisRecord()

        body: str = text
        return AnalysisRecord(
            summary=(
                self._guarded(
                    "summarize", lambda: self._summarizer.summarize(body), self.SUMMARY_ERROR
                )
                if options.summarize
                else None
            ),
            extracted_data=(
                self._guarded("extract", lambda: self._extractor.extract(body), {})
                if options.extract_info
                else None
            ),
            anomalies=(
                self._guarded(
                    "detect anomalies",
                    lambda: self._anomaly_detector.detect(body, category),
                    AnomalyReport.failed(self.ANOMALY_ERROR),
                )
                if options.anomaly_detection
                else None
            ),
            compliance_status=(
                self._guarded(
                    "check compliance",
                    lambda: self._compliance_checker.check(body, category),
                    ComplianceStatus.ERROR,
                )
                if options.compliance_check
                else None
            ),
        )

    @staticmethod
    def _guarded(step: str, run: Callable[[], T], fallback: T) -> T:
        try:
            return run()
        except Exception as exc:
            Log.exception(f"Failed to {step}: {exc}")
            return fallback

    @staticmethod
    def _coerce_options(options: OptionsInput) -> AnalysisOptions:
        if isinstance(options, AnalysisOptions):
            return options
        return AnalysisOptions.from_mapping(options)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, ref1: int, ref2: int) -> ComparisonResult:
        """Score similarity and diff the entities of two documents.

        Entities are always re-extracted from both texts, independent of the
        options either document was analyzed with.

        Raises:
            ComparisonError: if either document's text is unavailable or the
                entities cannot be extracted.
        """
        try:
            text_a, text_b = self._fetch_texts([ref1, ref2])
        except AcquisitionError as exc:
            raise ComparisonError(f"Document text unavailable: {exc}") from exc

        score = self._similarity_scorer.score(text_a, text_b)
        try:
            bag_a: EntityBag = self._extractor.extract(text_a)
            bag_b: EntityBag = self._extractor.extract(text_b)
        except ComponentError as exc:
            raise ComparisonError(f"Comparison of {ref1} and {ref2} failed: {exc}") from exc
        differences = self._differ.diff(bag_a, bag_b)

        Log.info(
            f"Compared documents {ref1} and {ref2}: similarity {score:.2f}%, "
            f"{len(differences)} categories differ"
        )
        return ComparisonResult(
            document_refs=(ref1, ref2),
            similarity_score=score,
            differences=differences,
        )

    # ------------------------------------------------------------------
    # Text acquisition
    # ------------------------------------------------------------------

    def _fetch_texts(self, refs: list[int]) -> list[str]:
        """Fetch texts concurrently, all within one shared deadline.

        Raises:
            AcquisitionError: on the first reference whose text is unavailable.
        """
        executor = ThreadPoolExecutor(max_workers=len(refs), thread_name_prefix="text-source")
        try:
            deadline = time.monotonic() + self._fetch_timeout
            futures = [executor.submit(self._text_source.get_text, ref) for ref in refs]
            return [self._await_text(ref, future, deadline) for ref, future in zip(refs, futures)]
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _await_text(self, ref: int, future: "Future[str]", deadline: float) -> str:
        try:
            text = future.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeoutError as exc:
            raise TextUnavailableError(
                f"timed out after {self._fetch_timeout}s fetching document {ref}"
            ) from exc
        except AcquisitionError:
            raise
        except Exception as exc:
            raise TextUnavailableError(f"text source failed for document {ref}: {exc}") from exc
        if text is None:
            raise TextUnavailableError(f"document {ref} has no text")
        return text
