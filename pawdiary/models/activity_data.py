# pawdiary/models/activity_data.py
"""
강타입 활동 데이터 (닫힌 태그 유니온)

저장소/비즈니스 로직이 사용하는 {"type": ..., "data": ...} 형식의 문서와
1:1로 대응되는 데이터클래스들입니다.
"""
from dataclasses import dataclass, asdict, fields
from enum import Enum
from typing import Any, Dict, Optional, Union
import logging

class ActivityVariant(Enum):
    WEIGHT = "Weight"
    HEIGHT = "Height"
    FEEDING = "Feeding"
    WATER_INTAKE = "WaterIntake"
    VACCINATION = "Vaccination"
    CHECK_UP = "CheckUp"
    CUSTOM = "Custom"

@dataclass
class MeasurementActivityData:
    """체중/신장 측정 (Growth 카테고리)"""
    value: float
    unit: str
    measurement_type: str
    notes: Optional[str] = None

@dataclass
class FeedingActivityData:
    """급식 (Diet 카테고리)"""
    portion_type: str
    amount: float
    unit: str
    brand: Optional[str] = None
    notes: Optional[str] = None

@dataclass
class WaterIntakeActivityData:
    """음수량 (Diet 카테고리)"""
    amount: float
    unit: str
    source: Optional[str] = None
    notes: Optional[str] = None

@dataclass
class VaccinationActivityData:
    """예방접종 (Health 카테고리). next_due_date는 ISO 8601 문자열입니다."""
    vaccine_name: str
    vet_name: Optional[str] = None
    next_due_date: Optional[str] = None
    batch_number: Optional[str] = None
    notes: Optional[str] = None

@dataclass
class CheckUpActivityData:
    """건강검진 (Health 카테고리)"""
    diagnosis: Optional[str] = None
    temperature: Optional[float] = None
    heart_rate: Optional[int] = None
    notes: Optional[str] = None

VariantPayload = Union[
    MeasurementActivityData,
    FeedingActivityData,
    WaterIntakeActivityData,
    VaccinationActivityData,
    CheckUpActivityData,
    Dict[str, Any],
]

PAYLOAD_TYPES = {
    ActivityVariant.WEIGHT: MeasurementActivityData,
    ActivityVariant.HEIGHT: MeasurementActivityData,
    ActivityVariant.FEEDING: FeedingActivityData,
    ActivityVariant.WATER_INTAKE: WaterIntakeActivityData,
    ActivityVariant.VACCINATION: VaccinationActivityData,
    ActivityVariant.CHECK_UP: CheckUpActivityData,
}

@dataclass
class ActivityData:
    """
    태그 유니온 값. CUSTOM 변형의 data는 원본 블록 매핑을 그대로 보존하는 dict입니다.
    """
    type: ActivityVariant
    data: VariantPayload

    def to_dict(self) -> Dict[str, Any]:
        """serde 호환 문서로 변환합니다. 값이 없는 선택 필드는 생략합니다."""
        if self.type == ActivityVariant.CUSTOM:
            return {"type": self.type.value, "data": self.data}
        payload = {k: v for k, v in asdict(self.data).items() if v is not None}
        return {"type": self.type.value, "data": payload}

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> "ActivityData":
        """
        {"type": ..., "data": ...} 문서로부터 인스턴스를 생성합니다.
        알 수 없는 태그나 모양이 맞지 않는 payload는 Custom으로 대체하여 읽기 경로를 막지 않습니다.
        """
        tag = document.get('type')
        payload = document.get('data') or {}
        try:
            variant = ActivityVariant(tag)
        except ValueError:
            logging.warning(f"Unknown ActivityData type '{tag}'. Falling back to Custom.")
            return cls(type=ActivityVariant.CUSTOM, data=dict(payload) if isinstance(payload, dict) else {"value": payload})

        if not isinstance(payload, dict):
            logging.warning(f"Non-mapping '{tag}' payload. Falling back to Custom.")
            return cls(type=ActivityVariant.CUSTOM, data={"value": payload})

        if variant == ActivityVariant.CUSTOM:
            return cls(type=variant, data=dict(payload))

        payload_type = PAYLOAD_TYPES[variant]
        known = {f.name for f in fields(payload_type)}
        try:
            return cls(type=variant, data=payload_type(**{k: v for k, v in payload.items() if k in known}))
        except TypeError as e:
            logging.warning(f"Malformed '{tag}' payload ({e}). Falling back to Custom.")
            return cls(type=ActivityVariant.CUSTOM, data=dict(payload))

def is_variant(activity_data: ActivityData, variant: ActivityVariant) -> bool:
    """특정 변형인지 확인하는 타입 가드."""
    return activity_data.type == variant
