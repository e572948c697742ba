# pawdiary/api/activities/adapter.py
"""
블록 매핑 ⇄ 강타입 ActivityData 변환 계층

템플릿 기반의 열린 블록 매핑을 저장소/비즈니스 로직이 사용하는 닫힌 태그 유니온으로 바꾸고,
그 역변환을 제공합니다. 이 계층은 선택 사항이며, 원본 블록 매핑이 항상 기준 데이터입니다.

패턴 인식 순서 (위에서부터 처음 일치하는 것 선택):
1. 'weight' 블록에 value가 있으면 Weight
2. 'height' 블록에 value가 있으면 Height
3. 'portion' 블록에 amount가 있으면 WaterIntake 또는 Feeding
4. 그 외에는 Custom (원본 블록 매핑을 그대로 보존)
"""
import copy
import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from pawdiary.models.activity_data import (
    ActivityData, ActivityVariant,
    MeasurementActivityData, FeedingActivityData, WaterIntakeActivityData
)

logger = logging.getLogger(__name__)

WATER_SOURCES = ('bowl', 'bottle', 'fountain')
TYPED_VARIANTS = (
    ActivityVariant.WEIGHT, ActivityVariant.HEIGHT,
    ActivityVariant.FEEDING, ActivityVariant.WATER_INTAKE,
)


def _has_key(blocks: Dict[str, Any], block_id: str, key: str) -> bool:
    block = blocks.get(block_id)
    return isinstance(block, dict) and key in block


def _notes(blocks: Dict[str, Any]) -> Optional[str]:
    notes = blocks.get('notes')
    return notes if isinstance(notes, str) else None


def _as_variant(variant_hint) -> Optional[ActivityVariant]:
    if variant_hint is None or isinstance(variant_hint, ActivityVariant):
        return variant_hint
    try:
        return ActivityVariant(variant_hint)
    except ValueError:
        logger.warning(f"Unknown variant hint '{variant_hint}'. Ignoring.")
        return None


class ActivityDataAdapter:
    """블록 매핑과 ActivityData 사이의 양방향 변환을 담당하는 정적 메서드 모음."""

    @staticmethod
    def _measurement(blocks: Dict[str, Any], block_id: str, variant: ActivityVariant) -> ActivityData:
        block = blocks[block_id]
        return ActivityData(type=variant, data=MeasurementActivityData(
            value=block['value'],
            unit=block.get('unit'),
            measurement_type=block.get('measurementType') or block_id,
            notes=_notes(blocks),
        ))

    @staticmethod
    def _water(blocks: Dict[str, Any]) -> ActivityData:
        portion = blocks['portion']
        return ActivityData(type=ActivityVariant.WATER_INTAKE, data=WaterIntakeActivityData(
            amount=portion['amount'],
            unit=portion.get('unit'),
            source=portion.get('portionType'),
            notes=_notes(blocks),
        ))

    @staticmethod
    def _feeding(blocks: Dict[str, Any]) -> ActivityData:
        portion = blocks['portion']
        return ActivityData(type=ActivityVariant.FEEDING, data=FeedingActivityData(
            portion_type=portion.get('portionType'),
            amount=portion['amount'],
            unit=portion.get('unit'),
            brand=portion.get('brand'),
            notes=_notes(blocks),
        ))

    @staticmethod
    def is_water(portion: Dict[str, Any], subcategory: Optional[str] = None) -> bool:
        """서브카테고리가 'water'이거나 portionType이 물그릇/물병/급수기인 경우."""
        if subcategory and subcategory.lower() == 'water':
            return True
        portion_type = portion.get('portionType')
        return isinstance(portion_type, str) and portion_type.lower() in WATER_SOURCES

    @staticmethod
    def _from_hint(blocks: Dict[str, Any], variant: ActivityVariant) -> Optional[ActivityData]:
        """템플릿이 선언한 변형의 블록 모양이 있으면 문자열 추측 없이 그 변형으로 변환합니다."""
        if variant == ActivityVariant.WEIGHT and _has_key(blocks, 'weight', 'value'):
            return ActivityDataAdapter._measurement(blocks, 'weight', variant)
        if variant == ActivityVariant.HEIGHT and _has_key(blocks, 'height', 'value'):
            return ActivityDataAdapter._measurement(blocks, 'height', variant)
        if variant == ActivityVariant.WATER_INTAKE and _has_key(blocks, 'portion', 'amount'):
            return ActivityDataAdapter._water(blocks)
        if variant == ActivityVariant.FEEDING and _has_key(blocks, 'portion', 'amount'):
            return ActivityDataAdapter._feeding(blocks)
        return None

    @staticmethod
    def to_backend_format(blocks: Dict[str, Any], subcategory: Optional[str] = None,
                          variant_hint=None) -> ActivityData:
        """
        블록 매핑을 ActivityData로 변환합니다.

        Args:
            blocks: 블록 id -> 블록 값
            subcategory: 물/급식 구분에 사용하는 서브카테고리 (예: 'Water')
            variant_hint: 템플릿의 typed_variant. 해당 블록 모양이 있으면 패턴 추측보다 우선합니다.
        """
        hint = _as_variant(variant_hint)
        if hint in TYPED_VARIANTS:
            typed = ActivityDataAdapter._from_hint(blocks, hint)
            if typed is not None:
                return typed
            logger.debug(f"Blocks do not match hinted variant {hint.value}, falling back to pattern detection.")

        if _has_key(blocks, 'weight', 'value'):
            return ActivityDataAdapter._measurement(blocks, 'weight', ActivityVariant.WEIGHT)

        if _has_key(blocks, 'height', 'value'):
            return ActivityDataAdapter._measurement(blocks, 'height', ActivityVariant.HEIGHT)

        if _has_key(blocks, 'portion', 'amount'):
            if ActivityDataAdapter.is_water(blocks['portion'], subcategory):
                return ActivityDataAdapter._water(blocks)
            return ActivityDataAdapter._feeding(blocks)

        return ActivityData(type=ActivityVariant.CUSTOM, data=copy.deepcopy(blocks))

    @staticmethod
    def to_frontend_format(activity_data: ActivityData) -> Dict[str, Any]:
        """ActivityData를 화면에서 사용하는 블록 매핑으로 되돌립니다."""
        variant, data = activity_data.type, activity_data.data

        if variant in (ActivityVariant.WEIGHT, ActivityVariant.HEIGHT):
            block_id = 'weight' if variant == ActivityVariant.WEIGHT else 'height'
            blocks = {block_id: {
                "value": data.value,
                "unit": data.unit,
                "measurementType": data.measurement_type,
            }}
        elif variant == ActivityVariant.FEEDING:
            portion = {"amount": data.amount, "unit": data.unit, "portionType": data.portion_type}
            if data.brand is not None:
                portion["brand"] = data.brand
            blocks = {"portion": portion}
        elif variant == ActivityVariant.WATER_INTAKE:
            blocks = {"portion": {
                "amount": data.amount,
                "unit": data.unit,
                "portionType": data.source or 'bowl',
            }}
        elif variant in (ActivityVariant.VACCINATION, ActivityVariant.CHECK_UP):
            # 아직 전용 블록이 없는 변형은 원본 payload를 custom 블록 하나로 전달
            payload = data if isinstance(data, dict) else {k: v for k, v in asdict(data).items() if v is not None}
            return {"custom": payload}
        elif variant == ActivityVariant.CUSTOM:
            return copy.deepcopy(data)
        else:
            logger.warning(f"Unknown ActivityData type: {variant}")
            return {}

        if data.notes:
            blocks["notes"] = data.notes
        return blocks

    @staticmethod
    def can_convert_to_typed(blocks: Dict[str, Any]) -> bool:
        return (
            _has_key(blocks, 'weight', 'value')
            or _has_key(blocks, 'height', 'value')
            or _has_key(blocks, 'portion', 'amount')
        )

    @staticmethod
    def get_variant_name(blocks: Dict[str, Any]) -> str:
        """로그/디버깅용으로 블록 매핑이 어떤 변형이 될지 이름을 반환합니다."""
        if blocks.get('weight'):
            return 'Weight'
        if blocks.get('height'):
            return 'Height'
        if blocks.get('portion'):
            return 'Feeding/WaterIntake'
        if blocks.get('vaccination'):
            return 'Vaccination'
        if blocks.get('checkup'):
            return 'CheckUp'
        return 'Custom'
