# pawdiary/services/test_activity_store.py
import pytest

from pawdiary.services.activity_store import ActivityStore
from pawdiary.services.document_store import InMemoryDocumentStore


def _document(pet_id=1, activity_date='2024-01-15T10:30:00Z', title='Breakfast'):
    return {
        'pet_id': pet_id,
        'category': 'Diet',
        'subcategory': 'Feeding',
        'title': title,
        'activity_date': activity_date,
        'activity_data': {'templateId': 'diet.feeding', 'blocks': {}, 'mode': 'guided'},
        'updated_at': '2024-01-15T10:30:00Z',
    }


@pytest.fixture
def activity_store():
    return ActivityStore(InMemoryDocumentStore())


def test_create_assigns_sequential_ids(activity_store):
    first = activity_store.create(_document())
    second = activity_store.create(_document())

    assert first['id'] == 1
    assert second['id'] == 2
    assert first['created_at']
    assert activity_store.get(1)['title'] == 'Breakfast'

def test_get_missing_raises(activity_store):
    with pytest.raises(FileNotFoundError):
        activity_store.get(99)

def test_update_keeps_id_and_created_at(activity_store):
    created = activity_store.create(_document())

    changed = _document(title='Dinner')
    changed['id'] = 123
    changed['created_at'] = 'tampered'
    updated = activity_store.update(created['id'], changed)

    assert updated['id'] == created['id']
    assert updated['created_at'] == created['created_at']
    assert activity_store.get(created['id'])['title'] == 'Dinner'

def test_update_missing_raises(activity_store):
    with pytest.raises(FileNotFoundError):
        activity_store.update(5, _document())

def test_delete(activity_store):
    created = activity_store.create(_document())
    activity_store.delete(created['id'])

    with pytest.raises(FileNotFoundError):
        activity_store.get(created['id'])
    with pytest.raises(FileNotFoundError):
        activity_store.delete(created['id'])

def test_list_for_pet_sorted_by_date_desc(activity_store):
    activity_store.create(_document(pet_id=1, activity_date='2024-01-10T08:00:00Z'))
    activity_store.create(_document(pet_id=1, activity_date='2024-02-01T08:00:00Z'))
    activity_store.create(_document(pet_id=2, activity_date='2024-03-01T08:00:00Z'))

    records = activity_store.list_for_pet(1)

    assert [r['activity_date'] for r in records] == ['2024-02-01T08:00:00Z', '2024-01-10T08:00:00Z']
    assert activity_store.list_for_pet(3) == []
