# pawdiary/api/activities/test_services.py
from datetime import datetime, timezone

import pytest

from pawdiary.core.errors import MappingError
from pawdiary.models.activity import ActivityCategory, ActivityFormData
from pawdiary.models.activity_data import ActivityVariant
from pawdiary.services.activity_store import ActivityStore
from pawdiary.services.document_store import InMemoryDocumentStore
from pawdiary.api.templates.registry import ActivityTemplateRegistry
from pawdiary.api.units.services import UnitPreferenceService
from pawdiary.api.quick_defaults.services import QuickDefaultsService
from pawdiary.api.activities.services import ActivityService


class ExplodingQuickDefaults:
    def record_usage(self, *args):
        raise RuntimeError("learning backend down")


@pytest.fixture
def settings_store():
    return InMemoryDocumentStore()


@pytest.fixture
def service(settings_store):
    return ActivityService(
        activity_store=ActivityStore(InMemoryDocumentStore()),
        templates=ActivityTemplateRegistry(),
        quick_defaults=QuickDefaultsService(settings_store),
        unit_preferences=UnitPreferenceService(settings_store),
    )


def _feeding_form(**blocks):
    form_blocks = {
        'title': 'Breakfast',
        'time': '2024-01-15T10:30:00Z',
        'portion': {'amount': 1, 'unit': 'cup', 'portionType': 'meal', 'brand': 'Acme'},
    }
    form_blocks.update(blocks)
    return ActivityFormData(
        pet_id=1,
        category=ActivityCategory.DIET,
        subcategory='Feeding',
        template_id='diet.feeding',
        blocks=form_blocks,
        title='  Breakfast ',
        activity_date=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    )


def _weight_form(value=5200, unit='g'):
    return ActivityFormData(
        pet_id=1,
        category=ActivityCategory.GROWTH,
        subcategory='Weight',
        template_id='growth.weight',
        blocks={
            'time': '2024-01-15T10:30:00Z',
            'weight': {'value': value, 'unit': unit, 'measurementType': 'weight'},
        },
        title='Weekly weigh-in',
        activity_date=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    )


def test_save_and_load_for_edit(service):
    saved = service.save_activity(_feeding_form(notes=''))

    assert saved['id'] == 1
    assert saved['title'] == 'Breakfast'
    assert 'notes' not in saved['activity_data']['blocks']

    form = service.load_for_edit(saved['id'])
    assert form.title == 'Breakfast'
    assert form.blocks['portion']['brand'] == 'Acme'
    assert form.category == ActivityCategory.DIET

def test_update_preserves_id_and_created_at(service):
    created = service.save_activity(_feeding_form())
    form = service.load_for_edit(created['id'])
    form.title = 'Late breakfast'

    updated = service.save_activity(form, record_id=created['id'])

    assert updated['id'] == created['id']
    assert updated['created_at'] == created['created_at']
    assert service.load_for_edit(created['id']).title == 'Late breakfast'

def test_update_missing_record(service):
    with pytest.raises(FileNotFoundError):
        service.save_activity(_feeding_form(), record_id=42)

def test_save_rejects_unknown_template(service):
    form = _feeding_form()
    form.template_id = 'diet.unknown'
    with pytest.raises(MappingError) as exc_info:
        service.save_activity(form)
    assert exc_info.value.field == 'template_id'

def test_save_reports_missing_fields_before_template_checks(service):
    form = _feeding_form()
    form.title = ''
    form.template_id = 'diet.unknown'
    with pytest.raises(MappingError) as exc_info:
        service.save_activity(form)
    assert exc_info.value.field == 'title'

def test_save_rejects_missing_required_block(service):
    form = _feeding_form(portion=None)
    with pytest.raises(MappingError) as exc_info:
        service.save_activity(form)
    assert exc_info.value.field == 'blocks.portion'
    assert service.list_for_pet(1) == []

def test_strict_blocks_validates_values():
    strict = ActivityService(
        activity_store=ActivityStore(InMemoryDocumentStore()),
        templates=ActivityTemplateRegistry(),
        strict_blocks=True,
    )
    form = _feeding_form(portion={'amount': 0, 'unit': 'cup', 'portionType': 'meal'})
    with pytest.raises(MappingError) as exc_info:
        strict.save_activity(form)
    assert exc_info.value.field == 'blocks.portion'

def test_saving_learns_quick_defaults(service):
    for _ in range(3):
        service.save_activity(_feeding_form())

    defaults = service.quick_defaults.get_category_defaults(1, 'Diet')
    assert defaults['portionUnit'] == 'cup'
    assert defaults['defaultBrand'] == 'Acme'

def test_learning_failure_does_not_block_save():
    service = ActivityService(
        activity_store=ActivityStore(InMemoryDocumentStore()),
        templates=ActivityTemplateRegistry(),
        quick_defaults=ExplodingQuickDefaults(),
    )
    saved = service.save_activity(_feeding_form())
    assert saved['id'] == 1

def test_load_typed_uses_template_variant(service):
    water = ActivityFormData(
        pet_id=1,
        category=ActivityCategory.DIET,
        subcategory='Water',
        template_id='diet.water',
        blocks={
            'time': '2024-01-15T10:30:00Z',
            'portion': {'amount': 300, 'unit': 'ml', 'portionType': 'dish'},
        },
        title='Water',
        activity_date=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    )
    saved = service.save_activity(water)

    typed = service.load_typed(saved['id'])
    assert typed.type == ActivityVariant.WATER_INTAKE
    assert typed.data.source == 'dish'

def test_load_typed_custom_for_untyped_templates(service):
    form = ActivityFormData(
        pet_id=1,
        category=ActivityCategory.LIFESTYLE,
        subcategory='Walk',
        template_id='lifestyle.walk',
        blocks={'time': '2024-01-15T10:30:00Z', 'timer': {'type': 'duration', 'duration': 30}},
        title='Evening walk',
        activity_date=datetime(2024, 1, 15, 18, 0, tzinfo=timezone.utc),
    )
    saved = service.save_activity(form)

    typed = service.load_typed(saved['id'])
    assert typed.type == ActivityVariant.CUSTOM
    assert typed.data == saved['activity_data']['blocks']

def test_display_blocks_use_preferred_unit_without_touching_storage(service):
    service.unit_preferences.set_preferred_unit('weight', 'kg', pet_id=1)
    saved = service.save_activity(_weight_form(5200, 'g'))
    form = service.load_for_edit(saved['id'])

    display = service.to_display_blocks(form.blocks, form.template_id, form.pet_id)

    assert display['weight']['unit'] == 'kg'
    assert display['weight']['value'] == pytest.approx(5.2)
    assert form.blocks['weight'] == {'value': 5200, 'unit': 'g', 'measurementType': 'weight'}
    assert service.load_for_edit(saved['id']).blocks['weight']['value'] == 5200

def test_display_blocks_rescale_large_values(service):
    service.unit_preferences.set_preferred_unit('weight', 'g', pet_id=1)
    blocks = {'weight': {'value': 2.5, 'unit': 'kg', 'measurementType': 'weight'}}

    display = service.to_display_blocks(blocks, 'growth.weight', 1)

    # kg -> g(선호 단위) -> kg(읽기 좋은 단위)
    assert display['weight']['unit'] == 'kg'
    assert display['weight']['value'] == pytest.approx(2.5)

def test_display_blocks_unknown_template_returns_copy(service):
    blocks = {'weight': {'value': 1, 'unit': 'kg'}}
    display = service.to_display_blocks(blocks, 'nope', 1)
    assert display == blocks
    assert display is not blocks

def test_delete_and_list(service):
    first = service.save_activity(_feeding_form())
    service.save_activity(_weight_form())

    assert len(service.list_for_pet(1)) == 2
    service.delete_activity(first['id'])
    assert len(service.list_for_pet(1)) == 1
    with pytest.raises(FileNotFoundError):
        service.load_for_edit(first['id'])
