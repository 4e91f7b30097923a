"""Track entity, always owned by exactly one submission"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..value_objects.entity_ids import TrackId


@dataclass
class Track:
    id: TrackId
    title: str
    genre: str
    filename: str
    stored_filename: str
    storage_path: str
    file_size: int
    mime_type: str
    bpm: Optional[int] = None
    key: str = ""
    description: str = ""
    uploaded_at: datetime = field(default_factory=datetime.utcnow)
    duration: Optional[float] = None
    # Signed from storage_path when a response is built; never persisted
    download_url: Optional[str] = None
