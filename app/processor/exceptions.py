class ProcessorError(Exception):
    """Base exception for failures while locating or reading a stored document."""


class DocumentNotFoundError(ProcessorError):
    """No documents row exists for the requested id."""

    def __init__(self, document_id: int) -> None:
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class UnsupportedStorageDiskError(ProcessorError):
    """The document lives on a storage disk this worker cannot read (e.g. s3)."""


class UnsupportedFileTypeError(ProcessorError):
    """No text can be acquired from the document's MIME type."""

    def __init__(self, mime_type: str, supported: list[str]) -> None:
        super().__init__(f"mime_type '{mime_type}' is not supported. Choose from: {supported}")
        self.mime_type = mime_type
        self.supported = supported
