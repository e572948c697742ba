# pawdiary/api/activities/services.py
import copy
import logging
from typing import Any, Dict, List, Optional

from pawdiary.core.errors import MappingError
from pawdiary.models.activity import ActivityCategory, ActivityFormData, ActivityMode, BlockType
from pawdiary.models.activity_data import ActivityData
from pawdiary.api.units.registry import get_unit_definition, convert_to_optimal_display_unit
from .adapter import ActivityDataAdapter
from .mapper import (
    clean_form_data, to_activity_record, to_form_data, validate_blocks_against_template
)

logger = logging.getLogger(__name__)

# (블록 id, 블록 값의 키) -> 학습할 빠른 기본값 필드
LEARNED_FIELDS = {
    ('portion', 'unit'): 'portionUnit',
    ('portion', 'brand'): 'defaultBrand',
    ('weight', 'unit'): 'weightUnit',
    ('height', 'unit'): 'heightUnit',
    ('cost', 'currency'): 'currency',
    ('location', 'name'): 'defaultLocation',
}


class ActivityService:
    """
    활동 기록 저장/불러오기를 조율하는 서비스 클래스.

    저장: 폼 정리 -> 템플릿 대조 -> 기록 변환 -> 저장소 -> 입력값 학습
    불러오기: 저장소 -> 폼 데이터 (또는 강타입 ActivityData)
    """
    def __init__(self, activity_store, templates, quick_defaults=None, unit_preferences=None,
                 fallback_category: str = 'Diet', mode: str = 'guided', strict_blocks: bool = False):
        self.activity_store = activity_store
        self.templates = templates
        self.quick_defaults = quick_defaults
        self.unit_preferences = unit_preferences
        self.fallback_category = ActivityCategory(fallback_category)
        self.mode = ActivityMode(mode)
        self.strict_blocks = strict_blocks
        logger.info("ActivityService initialized.")

    def _template_for(self, template_id: str):
        template = self.templates.get_template(template_id)
        if template is None:
            raise MappingError(f"Unknown template: {template_id}", 'template_id')
        return template

    def save_activity(self, form: ActivityFormData, record_id: Optional[int] = None) -> Dict[str, Any]:
        """
        폼 데이터를 저장하고 저장된 기록 문서를 반환합니다.
        record_id가 주어지면 기존 기록을 수정합니다 (id/created_at 유지).

        Raises:
            MappingError: 필수 필드 누락, 템플릿과 맞지 않는 블록
            FileNotFoundError: 수정할 기록이 없는 경우
        """
        cleaned = clean_form_data(form)
        existing = self.activity_store.get(record_id) if record_id is not None else None
        record = to_activity_record(cleaned, existing, mode=self.mode)

        template = self._template_for(cleaned.template_id)
        validate_blocks_against_template(cleaned, template, strict_blocks=self.strict_blocks)

        if existing is not None:
            saved = self.activity_store.update(record_id, record.to_dict())
        else:
            saved = self.activity_store.create(record.to_dict())

        self._learn_from_form(cleaned)
        return saved

    def _learn_from_form(self, form: ActivityFormData) -> None:
        """저장된 값으로 빠른 기본값을 학습합니다. 실패해도 저장 흐름을 막지 않습니다."""
        if self.quick_defaults is None:
            return
        category = form.category.value if isinstance(form.category, ActivityCategory) else form.category
        for (block_id, key), field in LEARNED_FIELDS.items():
            block = form.blocks.get(block_id)
            if not isinstance(block, dict) or key not in block:
                continue
            try:
                self.quick_defaults.record_usage(form.pet_id, category, field, block[key])
            except Exception as e:
                logger.warning(f"Failed to learn {field} for pet {form.pet_id}: {e}", exc_info=True)

    def load_for_edit(self, record_id: int) -> ActivityFormData:
        """
        Raises:
            FileNotFoundError: 기록이 없는 경우
            MappingError: 저장된 기록이 손상된 경우
        """
        document = self.activity_store.get(record_id)
        return to_form_data(document, fallback_category=self.fallback_category)

    def load_typed(self, record_id: int) -> ActivityData:
        """기록의 블록 매핑을 강타입 ActivityData로 변환합니다. 템플릿의 typed_variant를 힌트로 사용합니다."""
        document = self.activity_store.get(record_id)
        activity_data = document.get('activity_data') or {}
        template = self.templates.get_template(activity_data.get('templateId'))
        hint = template.typed_variant if template else None
        return ActivityDataAdapter.to_backend_format(
            activity_data.get('blocks') or {}, document.get('subcategory'), variant_hint=hint
        )

    def to_display_blocks(self, blocks: Dict[str, Any], template_id: str,
                          pet_id: Optional[int] = None) -> Dict[str, Any]:
        """
        측정값 블록을 사용자의 선호 단위(및 읽기 좋은 단위)로 변환한 표시용 복사본을 만듭니다.
        저장되는 값에는 사용하지 않습니다.
        """
        display = copy.deepcopy(blocks)
        template = self.templates.get_template(template_id)
        if template is None:
            return display

        for block_def in template.blocks:
            value = display.get(block_def.id)
            if block_def.type != BlockType.MEASUREMENT or not isinstance(value, dict):
                continue
            unit = get_unit_definition(value.get('unit'))
            if unit is None or not isinstance(value.get('value'), (int, float)):
                continue
            amount, unit_id = value['value'], unit.id
            if self.unit_preferences is not None:
                amount, unit_id = self.unit_preferences.convert_to_display_unit(
                    amount, unit_id, unit.category.value, pet_id
                )
            value['value'], value['unit'] = convert_to_optimal_display_unit(amount, unit_id)
        return display

    def delete_activity(self, record_id: int) -> None:
        self.activity_store.delete(record_id)

    def list_for_pet(self, pet_id: int) -> List[Dict[str, Any]]:
        return self.activity_store.list_for_pet(pet_id)
