class AnalysisError(Exception):
    """Base exception for all analysis-related errors."""


class AcquisitionError(AnalysisError):
    """Raised when document text cannot be obtained from the text source."""


class TextUnavailableError(AcquisitionError):
    """Raised when a document's text is missing, unreadable, or of an unsupported type."""


class ComponentError(AnalysisError):
    """Base for failures inside a single analysis step."""


class ExtractionError(ComponentError):
    """Raised when entity extraction fails."""


class NothingToSummarizeError(ComponentError):
    """Raised when the input text contains no sentences."""


class AnomalyDetectionError(ComponentError):
    """Raised when anomaly detection fails."""


class ComplianceCheckError(ComponentError):
    """Raised when a compliance check cannot be evaluated."""


class AnalysisValidationError(AnalysisError):
    """Raised for an unsupported category or malformed processing options."""


class ComparisonError(AnalysisError):
    """Raised when a comparison cannot be performed."""
