# pawdiary/services/activity_store.py
import logging
from typing import Any, Dict, List

from pawdiary.services.document_store import DocumentStore
from pawdiary.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

RECORD_KEY_PREFIX = 'activity-'
SEQUENCE_KEY = 'activity_sequence'


class ActivityStore:
    """
    활동 기록의 생성/조회/수정/삭제를 담당하는 영속화 협력자.
    정수 id와 created_at은 최초 생성 시 여기서 할당됩니다.
    """
    def __init__(self, store: DocumentStore):
        self.store = store
        logger.info("ActivityStore initialized.")

    def _key(self, record_id: int) -> str:
        return f"{RECORD_KEY_PREFIX}{record_id}"

    def _next_id(self) -> int:
        sequence = self.store.get(SEQUENCE_KEY) or {"last_id": 0}
        next_id = int(sequence.get("last_id", 0)) + 1
        self.store.set(SEQUENCE_KEY, {"last_id": next_id})
        return next_id

    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """id/created_at이 없는 신규 기록 문서를 저장하고, 할당된 값이 포함된 문서를 반환합니다."""
        with self.store.write_lock:
            record_id = self._next_id()
            timestamp = DateTimeUtils.to_iso_string(DateTimeUtils.now())
            saved = dict(document)
            saved['id'] = record_id
            saved['created_at'] = timestamp
            saved.setdefault('updated_at', timestamp)
            self.store.set(self._key(record_id), saved)
        logger.info(f"Activity record created (id: {record_id}, pet: {saved.get('pet_id')})")
        return saved

    def get(self, record_id: int) -> Dict[str, Any]:
        document = self.store.get(self._key(record_id))
        if document is None:
            raise FileNotFoundError(f"활동 기록을 찾을 수 없습니다: {record_id}")
        return document

    def update(self, record_id: int, document: Dict[str, Any]) -> Dict[str, Any]:
        """기존 기록을 교체합니다. id와 created_at은 저장된 값이 유지됩니다."""
        with self.store.write_lock:
            existing = self.get(record_id)
            saved = dict(document)
            saved['id'] = existing['id']
            saved['created_at'] = existing['created_at']
            self.store.set(self._key(record_id), saved)
        logger.info(f"Activity record updated (id: {record_id})")
        return saved

    def delete(self, record_id: int) -> None:
        self.get(record_id)
        self.store.delete(self._key(record_id))
        logger.info(f"Activity record deleted (id: {record_id})")

    def list_for_pet(self, pet_id: int) -> List[Dict[str, Any]]:
        """특정 반려동물의 기록을 activity_date 내림차순으로 반환합니다."""
        records = []
        for key in self.store.keys(RECORD_KEY_PREFIX):
            document = self.store.get(key)
            if document and document.get('pet_id') == pet_id:
                records.append(document)
        records.sort(key=lambda r: r.get('activity_date') or '', reverse=True)
        return records
