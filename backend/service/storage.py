"""In-memory conversion history."""

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .schema import ConversionRecord


class ConversionStore:
    """Conversion records keyed by an id counting up from 1."""

    def __init__(self):
        self._records: Dict[int, ConversionRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(
        self,
        source_code: str,
        target_code: str,
        source_language: str,
        target_language: str,
        explanation: str,
    ) -> ConversionRecord:
        with self._lock:
            record = ConversionRecord(
                id=self._next_id,
                source_code=source_code,
                target_code=target_code,
                source_language=source_language,
                target_language=target_language,
                explanation=explanation,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._records[record.id] = record
            self._next_id += 1
        return record

    def get(self, record_id: int) -> Optional[ConversionRecord]:
        return self._records.get(record_id)

    def list(self) -> List[ConversionRecord]:
        """All records, newest first."""
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda record: record.id, reverse=True)
