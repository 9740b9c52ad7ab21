from app.analysis.analyzer import DocumentAnalyzer
from app.analysis.base import RecordSink, TextSource
from app.analysis.factory import AnalyzerFactory

__all__ = ["AnalyzerFactory", "DocumentAnalyzer", "RecordSink", "TextSource"]
