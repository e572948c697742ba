# pawdiary/api/activities/mapper.py
"""
활동 폼 데이터 ⇄ 활동 기록 변환

- ActivityFormData: 사용자가 편집 중인 폼 상태 (블록 id -> 블록 값)
- ActivityRecord: 저장소에 보관되는 문서

쓰기 경로(to_activity_record)는 엄격하게 검증하여 MappingError를 발생시키고,
읽기 경로(to_form_data)는 알 수 없는 카테고리처럼 복구 가능한 문제는 경고 로그 후 대체값을 사용합니다.
"""
import copy
import json
import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Union

from pawdiary.core.errors import MappingError
from pawdiary.models.activity import (
    ActivityCategory, ActivityFormData, ActivityMode, ActivityRecord, ActivityTemplate, BlockType
)
from pawdiary.utils.datetime_utils import DateTimeUtils
from pawdiary.api.templates.block_schemas import get_block_validation_errors

logger = logging.getLogger(__name__)


def is_empty_block_value(value: Any) -> bool:
    """None, 빈 문자열, 빈 dict/list는 저장하지 않는 빈 값입니다."""
    if value is None or value == '':
        return True
    if isinstance(value, (dict, list)) and len(value) == 0:
        return True
    return False


def _clean_blocks(blocks: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    # 블록 안의 datetime/date 값은 ISO 문자열로 저장
    return {k: DateTimeUtils.to_document(v) for k, v in (blocks or {}).items() if not is_empty_block_value(v)}


def _missing_fields(form: ActivityFormData):
    missing = []
    if not form.pet_id:
        missing.append('pet_id')
    if not (form.title or '').strip():
        missing.append('title')
    if not form.category:
        missing.append('category')
    if not form.template_id:
        missing.append('template_id')
    if not form.activity_date:
        missing.append('activity_date')
    return missing


def _to_category(category) -> ActivityCategory:
    if isinstance(category, ActivityCategory):
        return category
    try:
        return ActivityCategory(category)
    except ValueError:
        raise MappingError(f"Unknown category: {category}", 'category')


def _to_datetime(value, field_name: str):
    try:
        return DateTimeUtils.validate_datetime_field(value, field_name)
    except ValueError:
        raise MappingError('Invalid activity date format', field_name)


def validate_form_data(form: ActivityFormData) -> bool:
    """
    필수 필드를 검사합니다.

    Raises:
        MappingError: 누락된 필드가 있는 경우. field에는 첫 번째 누락 필드가 담깁니다.
    """
    missing = _missing_fields(form)
    if missing:
        raise MappingError(f"Form validation failed: {', '.join(missing)} required", missing[0])
    return True


def to_activity_record(form: ActivityFormData,
                       existing: Optional[Union[ActivityRecord, Dict[str, Any]]] = None,
                       mode: ActivityMode = ActivityMode.GUIDED) -> ActivityRecord:
    """
    폼 데이터를 저장용 활동 기록으로 변환합니다.

    existing이 주어지면(수정) id와 created_at을 그대로 유지하고 updated_at만 갱신합니다.
    주어지지 않으면(생성) id와 created_at 없이 반환하여 저장소가 할당하도록 합니다.

    Raises:
        MappingError: 필수 필드 누락, 알 수 없는 카테고리, 잘못된 날짜
    """
    missing = _missing_fields(form)
    if missing:
        field = missing[0]
        raise MappingError(f"{field} is required", field)

    category = _to_category(form.category)
    activity_date = _to_datetime(form.activity_date, 'activity_date')
    description = (form.description or '').strip() or None
    mode_value = mode.value if isinstance(mode, ActivityMode) else mode

    record = ActivityRecord(
        pet_id=form.pet_id,
        category=category.value,
        subcategory=(form.subcategory or '').strip(),
        title=form.title.strip(),
        description=description,
        activity_date=DateTimeUtils.to_iso_string(activity_date),
        activity_data={
            "templateId": form.template_id,
            "blocks": _clean_blocks(form.blocks),
            "mode": mode_value,
        },
        updated_at=DateTimeUtils.to_iso_string(DateTimeUtils.now()),
    )

    if existing is not None:
        existing_doc = existing.to_dict() if isinstance(existing, ActivityRecord) else existing
        if existing_doc.get('id'):
            record.id = existing_doc['id']
            record.created_at = existing_doc.get('created_at') or record.updated_at

    return record


def _extract_structured_data(form: ActivityFormData, blocks: Dict[str, Any]) -> None:
    """measurement_*/attachment_* 블록과 cost/reminder/recurrence 블록을 구조화 필드로 복사합니다."""
    measurements = {
        key[len('measurement_'):]: value
        for key, value in blocks.items()
        if key.startswith('measurement_') and value
    }
    if measurements:
        form.measurements = measurements

    attachments = [value for key, value in blocks.items() if key.startswith('attachment_') and value]
    if attachments:
        form.attachments = attachments

    if blocks.get('cost'):
        form.cost = blocks['cost']
    if blocks.get('reminder'):
        form.reminder = blocks['reminder']
    if blocks.get('recurrence'):
        form.recurrence = blocks['recurrence']


def to_form_data(record: Union[ActivityRecord, Dict[str, Any]],
                 fallback_category: ActivityCategory = ActivityCategory.DIET) -> ActivityFormData:
    """
    저장된 활동 기록을 편집용 폼 데이터로 변환합니다.

    알 수 없는 카테고리는 fallback_category로 대체하고 경고를 남깁니다.

    Raises:
        MappingError: id, pet_id, activity_data.templateId가 없거나 activity_date를 해석할 수 없는 경우
    """
    document = record.to_dict() if isinstance(record, ActivityRecord) else record

    if not document.get('id'):
        raise MappingError('Record ID is required', 'id')
    if not document.get('pet_id'):
        raise MappingError('Pet ID is required in record', 'pet_id')

    activity_data = document.get('activity_data') or {}
    if not activity_data.get('templateId'):
        raise MappingError('Template ID is required in activity data', 'activity_data.templateId')

    activity_date = _to_datetime(document.get('activity_date'), 'activity_date')

    try:
        category = ActivityCategory(document.get('category'))
    except ValueError:
        logger.warning(f"Unknown category: {document.get('category')}, defaulting to {fallback_category.value}")
        category = fallback_category

    blocks = copy.deepcopy(activity_data.get('blocks') or {})
    form = ActivityFormData(
        pet_id=document['pet_id'],
        category=category,
        subcategory=document.get('subcategory') or '',
        template_id=activity_data['templateId'],
        blocks=blocks,
        title=document.get('title') or '',
        description=document.get('description') or None,
        activity_date=activity_date,
    )
    _extract_structured_data(form, blocks)
    return form


def clean_form_data(form: ActivityFormData) -> ActivityFormData:
    """
    제출 전 폼 데이터를 정리한 새 객체를 반환합니다 (멱등).
    문자열 공백 제거, 빈 블록 값 제거, activity_date를 UTC로 정규화합니다.
    """
    return replace(
        form,
        title=(form.title or '').strip(),
        description=(form.description or '').strip() or None,
        subcategory=(form.subcategory or '').strip(),
        blocks=_clean_blocks(form.blocks),
        activity_date=_normalized_date(form.activity_date),
    )


def _normalized_date(value):
    if not value:
        return None
    try:
        return DateTimeUtils.validate_datetime_field(value)
    except ValueError:
        return value


def _category_value(category):
    return category.value if isinstance(category, ActivityCategory) else category


def has_form_data_changed(original: ActivityFormData, current: ActivityFormData) -> bool:
    if original is current:
        return False

    for field in ('pet_id', 'subcategory', 'template_id', 'title', 'description'):
        if getattr(original, field) != getattr(current, field):
            return True
    if _category_value(original.category) != _category_value(current.category):
        return True
    if _normalized_date(original.activity_date) != _normalized_date(current.activity_date):
        return True

    original_blocks = json.dumps(original.blocks or {}, sort_keys=True, default=str)
    current_blocks = json.dumps(current.blocks or {}, sort_keys=True, default=str)
    return original_blocks != current_blocks


def create_default_form_data(pet_id: int, template_id: str) -> ActivityFormData:
    """새 활동 폼의 초기값."""
    return ActivityFormData(
        pet_id=pet_id,
        category=None,
        subcategory='',
        template_id=template_id,
        blocks={},
        title='',
        description=None,
        activity_date=DateTimeUtils.now(),
    )


def _preferred(value, allowed, fallback):
    if value and (not allowed or value in allowed):
        return value
    return fallback


def _prefill_block(block_def, defaults: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    config = block_def.config
    if block_def.type == BlockType.MEASUREMENT:
        measurement_type = config.get('measurementType', block_def.id)
        default_key = f"{measurement_type}Unit"
        unit = _preferred(defaults.get(default_key), config.get('units'), config.get('defaultUnit'))
        return {"unit": unit, "measurementType": measurement_type}
    if block_def.type == BlockType.PORTION:
        prefill = {"unit": _preferred(defaults.get('portionUnit'), config.get('units'), config.get('defaultUnit'))}
        if config.get('showBrand') and defaults.get('defaultBrand'):
            prefill["brand"] = defaults['defaultBrand']
        return prefill
    if block_def.type == BlockType.COST:
        return {"currency": _preferred(defaults.get('currency'), config.get('currencies'), config.get('defaultCurrency'))}
    if block_def.type == BlockType.WEATHER:
        return {"temperatureUnit": _preferred(defaults.get('temperatureUnit'), ['C', 'F'], 'C')}
    if block_def.type == BlockType.LOCATION and defaults.get('defaultLocation'):
        return {"name": defaults['defaultLocation']}
    return None


def create_form_from_template(pet_id: int, template: ActivityTemplate,
                              defaults: Optional[Dict[str, Any]] = None) -> ActivityFormData:
    """
    템플릿으로 새 폼을 만들고, 빠른 기본값으로 단위/브랜드/통화 등을 미리 채웁니다.
    defaults는 QuickDefaultsService.get_category_defaults()의 결과입니다.
    """
    defaults = defaults or {}
    form = create_default_form_data(pet_id, template.id)
    form.category = template.category
    form.subcategory = template.subcategory

    for block_def in template.blocks:
        prefill = _prefill_block(block_def, defaults)
        if prefill:
            form.blocks[block_def.id] = prefill
    return form


def validate_blocks_against_template(form: ActivityFormData, template: ActivityTemplate,
                                     strict_blocks: bool = False) -> bool:
    """
    폼의 블록을 템플릿 정의와 대조합니다.

    - 템플릿에 없는 블록 id는 허용하지 않습니다.
    - required 블록은 비어 있지 않은 값이 있어야 합니다.
    - strict_blocks=True이면 각 블록 값을 블록 종류별 스키마로 검증합니다.

    Raises:
        MappingError: field는 'blocks.<블록 id>' 형식입니다.
    """
    blocks = form.blocks or {}
    for block_id in blocks:
        if template.get_block(block_id) is None:
            raise MappingError(f"Block '{block_id}' is not defined in template '{template.id}'", f"blocks.{block_id}")

    for block_def in template.blocks:
        value = blocks.get(block_def.id)
        if is_empty_block_value(value):
            if block_def.required:
                raise MappingError(f"{block_def.label or block_def.id} is required", f"blocks.{block_def.id}")
            continue
        if strict_blocks:
            errors = get_block_validation_errors(block_def.type, value)
            if errors:
                raise MappingError(errors[0], f"blocks.{block_def.id}")
    return True
