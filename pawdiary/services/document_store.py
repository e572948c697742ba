# pawdiary/services/document_store.py
"""
키-값 문서 저장소

선호 단위, 빠른 기본값, 사용 횟수 카운터, 활동 기록은 모두 하나의 키에 대응하는
JSON 호환 문서로 저장됩니다. 읽기/쓰기는 문서 전체 단위로 이루어지며(부분 갱신 없음),
같은 저장소 인스턴스에 대한 쓰기는 락으로 직렬화됩니다 (마지막 쓰기가 이김).
"""
import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote

from firebase_admin import firestore

from pawdiary.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """get/set/delete/keys 네 가지 연산만 제공하는 저장소 인터페이스."""

    def __init__(self):
        self.write_lock = threading.RLock()

    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """문서를 반환합니다. 없으면 None."""

    @abstractmethod
    def set(self, key: str, document: Dict[str, Any]) -> None:
        """문서 전체를 교체합니다."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """문서를 삭제합니다. 없으면 아무 일도 하지 않습니다."""

    @abstractmethod
    def keys(self, prefix: str = '') -> List[str]:
        """prefix로 시작하는 모든 키를 정렬하여 반환합니다."""


class InMemoryDocumentStore(DocumentStore):
    """테스트 및 'memory' 백엔드용 저장소. 프로세스 종료 시 내용이 사라집니다."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        super().__init__()
        self._documents: Dict[str, Dict[str, Any]] = copy.deepcopy(initial or {})

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        document = self._documents.get(key)
        # 호출자가 반환값을 수정해도 저장된 문서에 영향이 없도록 복사본을 반환
        return copy.deepcopy(document) if document is not None else None

    def set(self, key: str, document: Dict[str, Any]) -> None:
        with self.write_lock:
            self._documents[key] = copy.deepcopy(document)

    def delete(self, key: str) -> None:
        with self.write_lock:
            self._documents.pop(key, None)

    def keys(self, prefix: str = '') -> List[str]:
        return sorted(k for k in list(self._documents) if k.startswith(prefix))


class FirestoreDocumentStore(DocumentStore):
    """
    Firestore 컬렉션 하나를 키-값 저장소로 사용합니다.
    Firestore 문서 ID에는 '/'를 쓸 수 없으므로 키를 URL 인코딩하여 문서 ID로 사용합니다.
    """

    def __init__(self, collection_name: str, client=None):
        super().__init__()
        self.db = client or firestore.client()
        self.collection_ref = self.db.collection(collection_name)
        logger.info(f"FirestoreDocumentStore initialized (collection: {collection_name})")

    @staticmethod
    def _doc_id(key: str) -> str:
        return quote(key, safe='')

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self.collection_ref.document(self._doc_id(key)).get()
            return doc.to_dict() if doc.exists else None
        except Exception as e:
            logger.error(f"Firestore 문서 조회 실패 (key: {key}): {e}")
            raise StoreUnavailableError(str(e)) from e

    def set(self, key: str, document: Dict[str, Any]) -> None:
        try:
            with self.write_lock:
                self.collection_ref.document(self._doc_id(key)).set(document)
        except Exception as e:
            logger.error(f"Firestore 문서 저장 실패 (key: {key}): {e}")
            raise StoreUnavailableError(str(e)) from e

    def delete(self, key: str) -> None:
        try:
            with self.write_lock:
                self.collection_ref.document(self._doc_id(key)).delete()
        except Exception as e:
            logger.error(f"Firestore 문서 삭제 실패 (key: {key}): {e}")
            raise StoreUnavailableError(str(e)) from e

    def keys(self, prefix: str = '') -> List[str]:
        try:
            all_keys = [unquote(doc_ref.id) for doc_ref in self.collection_ref.list_documents()]
        except Exception as e:
            logger.error(f"Firestore 문서 목록 조회 실패 (prefix: {prefix}): {e}")
            raise StoreUnavailableError(str(e)) from e
        return sorted(k for k in all_keys if k.startswith(prefix))
