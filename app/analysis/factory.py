import random

from app.analysis.analyzer import DocumentAnalyzer
from app.analysis.anomaly_detector import AnomalyDetector, uniform_confidence
from app.analysis.base import TextSource
from app.analysis.compliance_checker import ComplianceChecker
from app.analysis.differ import InformationDiffer
from app.analysis.entity_extractor import EntityExtractor
from app.analysis.similarity import SimilarityScorer
from app.analysis.summarizer import Summarizer
from app.config.settings import Settings


class AnalyzerFactory:
    """Creates a DocumentAnalyzer wired from settings."""

    @classmethod
    def create(cls, settings: Settings, text_source: TextSource) -> DocumentAnalyzer:
        seed = settings.anomaly_confidence_seed
        rng = random.Random(seed) if seed is not None else None
        return DocumentAnalyzer(
            text_source=text_source,
            extractor=EntityExtractor(),
            summarizer=Summarizer(ratio=settings.summary_ratio),
            anomaly_detector=AnomalyDetector(confidence_source=uniform_confidence(rng)),
            compliance_checker=ComplianceChecker(),
            similarity_scorer=SimilarityScorer(),
            differ=InformationDiffer(),
            fetch_timeout_seconds=settings.text_source_timeout_seconds,
        )
