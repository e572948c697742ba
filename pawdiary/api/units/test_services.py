# pawdiary/api/units/test_services.py
import pytest

from pawdiary.core.errors import StoreUnavailableError
from pawdiary.services.document_store import InMemoryDocumentStore
from pawdiary.api.units.services import UnitPreferenceService, UNIT_PREFERENCES_KEY


class FlakyStore(InMemoryDocumentStore):
    """available=False인 동안 모든 입출력이 실패하는 저장소"""
    def __init__(self, initial=None):
        super().__init__(initial)
        self.available = True

    def _check(self):
        if not self.available:
            raise StoreUnavailableError("disk unavailable")

    def get(self, key):
        self._check()
        return super().get(key)

    def set(self, key, document):
        self._check()
        super().set(key, document)


@pytest.fixture
def service():
    return UnitPreferenceService(InMemoryDocumentStore())


def test_defaults_resolve_to_seeded_units(service):
    assert service.get_preferred_unit('weight') == 'g'
    assert service.get_preferred_unit('volume') == 'cup'
    # 기본값 테이블에 없는 카테고리는 기준 단위
    assert service.get_preferred_unit('count') == 'piece'
    assert service.get_preferred_unit('serving') == 'portion'
    assert service.get_preferred_unit('bogus') == ''

def test_resolution_order(service):
    service.set_preferred_unit('weight', 'kg')
    service.set_preferred_unit('weight', 'lb', pet_id=7)

    assert service.get_preferred_unit('weight', pet_id=7) == 'lb'
    assert service.get_preferred_unit('weight', pet_id=8) == 'kg'
    assert service.get_preferred_unit('weight') == 'kg'

def test_set_rejects_unit_from_other_category(service):
    with pytest.raises(ValueError):
        service.set_preferred_unit('weight', 'ml')
    with pytest.raises(ValueError):
        service.set_preferred_unit('weight', 'stone')

def test_writes_persist_immediately():
    store = InMemoryDocumentStore()
    service = UnitPreferenceService(store)
    service.set_preferred_unit('length', 'in', pet_id=3)

    document = store.get(UNIT_PREFERENCES_KEY)
    assert document['petSpecificUnits'] == {'3': {'length': 'in'}}

    reloaded = UnitPreferenceService(store)
    assert reloaded.get_preferred_unit('length', pet_id=3) == 'in'

def test_clear_for_pet_keeps_global(service):
    service.set_preferred_unit('weight', 'kg')
    service.set_preferred_unit('weight', 'lb', pet_id=1)
    service.set_preferred_unit('weight', 'oz', pet_id=2)

    service.clear_unit_preferences(pet_id=1)

    assert service.get_preferred_unit('weight', pet_id=1) == 'kg'
    assert service.get_preferred_unit('weight', pet_id=2) == 'oz'

def test_clear_all_restores_defaults(service):
    service.set_preferred_unit('weight', 'kg')
    service.set_preferred_unit('weight', 'lb', pet_id=1)

    service.clear_unit_preferences()

    assert service.get_preferred_unit('weight', pet_id=1) == 'g'

def test_get_unit_preferences_returns_copy(service):
    preferences = service.get_unit_preferences()
    preferences.default_units['weight'] = 'mg'
    assert service.get_preferred_unit('weight') == 'g'

def test_reload_picks_up_external_changes():
    store = InMemoryDocumentStore()
    service = UnitPreferenceService(store)
    store.set(UNIT_PREFERENCES_KEY, {'defaultUnits': {'weight': 'oz'}, 'petSpecificUnits': {}})

    service.reload_unit_preferences()

    assert service.get_preferred_unit('weight') == 'oz'

def test_malformed_pet_ids_are_skipped():
    store = InMemoryDocumentStore({
        UNIT_PREFERENCES_KEY: {
            'defaultUnits': {'weight': 'kg'},
            'petSpecificUnits': {'abc': {'weight': 'lb'}, '4': {'weight': 'oz'}},
        }
    })
    service = UnitPreferenceService(store)
    assert service.get_unit_preferences().pet_specific_units == {4: {'weight': 'oz'}}

def test_convert_to_display_unit(service):
    service.set_preferred_unit('weight', 'kg', pet_id=1)

    value, unit = service.convert_to_display_unit(2500, 'g', 'weight', pet_id=1)
    assert (value, unit) == (pytest.approx(2.5), 'kg')

    # 변환할 수 없으면 원래 값 그대로
    assert service.convert_to_display_unit(3, 'treat', 'count') == (3, 'treat')


# --- 저장소 장애 시 (내구성 저하 모드) ---

def test_unavailable_store_on_load_uses_defaults():
    store = FlakyStore()
    store.available = False

    service = UnitPreferenceService(store)

    assert service.degraded is True
    assert service.get_preferred_unit('weight') == 'g'

def test_failed_write_keeps_in_memory_value_and_retries():
    store = FlakyStore()
    service = UnitPreferenceService(store)
    store.available = False

    service.set_preferred_unit('weight', 'kg')  # 예외를 던지지 않음

    assert service.degraded is True
    assert service.get_preferred_unit('weight') == 'kg'

    store.available = True
    service.set_preferred_unit('volume', 'ml')

    assert service.degraded is False
    assert store.get(UNIT_PREFERENCES_KEY)['defaultUnits']['weight'] == 'kg'

@pytest.mark.parametrize('document, expected_weight_unit', [
    (['not', 'a', 'dict'], 'g'),
    ({'defaultUnits': {'weight': 'kg'}, 'petSpecificUnits': ['oops']}, 'kg'),
])
def test_corrupt_stored_preferences_do_not_block_startup(document, expected_weight_unit):
    service = UnitPreferenceService(InMemoryDocumentStore({UNIT_PREFERENCES_KEY: document}))

    assert service.get_preferred_unit('weight', pet_id=1) == expected_weight_unit
    assert service.get_unit_preferences().pet_specific_units == {}
