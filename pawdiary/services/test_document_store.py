# pawdiary/services/test_document_store.py
import pytest

from pawdiary.core.errors import StoreUnavailableError
from pawdiary.services.document_store import InMemoryDocumentStore, FirestoreDocumentStore


class FakeSnapshot:
    def __init__(self, data):
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data)


class FakeDocumentRef:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self.collection.docs.get(self.id))

    def set(self, data):
        self.collection.docs[self.id] = dict(data)

    def delete(self):
        self.collection.docs.pop(self.id, None)


class FakeCollection:
    def __init__(self):
        self.docs = {}

    def document(self, doc_id):
        return FakeDocumentRef(self, doc_id)

    def list_documents(self):
        return [FakeDocumentRef(self, doc_id) for doc_id in self.docs]


class FakeFirestoreClient:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


class BrokenCollection:
    def document(self, doc_id):
        raise ConnectionError("firestore unreachable")

    def list_documents(self):
        raise ConnectionError("firestore unreachable")


class BrokenFirestoreClient:
    def collection(self, name):
        return BrokenCollection()


# --- InMemoryDocumentStore ---

def test_in_memory_get_set_delete():
    store = InMemoryDocumentStore()
    assert store.get('missing') is None

    store.set('a', {'value': 1})
    assert store.get('a') == {'value': 1}

    store.set('a', {'value': 2})
    assert store.get('a') == {'value': 2}

    store.delete('a')
    assert store.get('a') is None
    store.delete('a')  # 없는 키 삭제는 오류 없음

def test_in_memory_returns_copies():
    store = InMemoryDocumentStore()
    store.set('a', {'items': [1]})
    document = store.get('a')
    document['items'].append(2)
    assert store.get('a') == {'items': [1]}

def test_in_memory_keys_with_prefix():
    store = InMemoryDocumentStore({'usage-count-2': {}, 'usage-count-1': {}, 'quick_defaults': {}})
    assert store.keys('usage-count-') == ['usage-count-1', 'usage-count-2']
    assert len(store.keys()) == 3


# --- FirestoreDocumentStore ---

def test_firestore_store_round_trip_with_encoded_keys():
    client = FakeFirestoreClient()
    store = FirestoreDocumentStore('paw_diary_settings', client=client)

    store.set('usage-count-1-Diet-portionUnit-1/2 cup', {'count': 1})
    assert store.get('usage-count-1-Diet-portionUnit-1/2 cup') == {'count': 1}

    # 문서 ID에는 '/'가 들어가지 않음
    doc_ids = list(client.collections['paw_diary_settings'].docs)
    assert all('/' not in doc_id for doc_id in doc_ids)

    assert store.keys('usage-count-') == ['usage-count-1-Diet-portionUnit-1/2 cup']

    store.delete('usage-count-1-Diet-portionUnit-1/2 cup')
    assert store.get('usage-count-1-Diet-portionUnit-1/2 cup') is None

def test_firestore_store_wraps_errors():
    store = FirestoreDocumentStore('paw_diary_settings', client=BrokenFirestoreClient())

    with pytest.raises(StoreUnavailableError):
        store.get('unit_preferences')
    with pytest.raises(StoreUnavailableError):
        store.set('unit_preferences', {})
    with pytest.raises(StoreUnavailableError):
        store.delete('unit_preferences')
    with pytest.raises(StoreUnavailableError):
        store.keys()
