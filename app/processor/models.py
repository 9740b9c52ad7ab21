from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class UploadedDocument:
    """Domain model for an uploaded document (subset of DB columns).

    ``category`` and ``options`` are kept as stored; they are validated when
    the document is analyzed.
    """

    id: int
    uuid: str
    user_id: int
    name: str
    storage_disk: str
    mime_type: str
    file_size_bytes: int
    category: str
    options: dict[str, Any] = field(default_factory=dict)
