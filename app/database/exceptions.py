class RecordAlreadyExistsError(Exception):
    """Raised when a document already has a stored analysis record."""
