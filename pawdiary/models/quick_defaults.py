# pawdiary/models/quick_defaults.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from pawdiary.utils.datetime_utils import DateTimeUtils

def seed_global_defaults() -> Dict[str, Any]:
    """새 반려동물에게 처음 부여되는 전역 기본값."""
    return {
        "defaultTime": "now",
        "weightUnit": "kg",
        "heightUnit": "cm",
        "temperatureUnit": "C",
        "portionUnit": "cup",
        "currency": "USD",
        "useGPS": True,
        "commonTags": [],
        "defaultPeople": [],
    }

@dataclass
class PetQuickDefaults:
    """
    반려동물별 빠른 기본값.
    categories의 항목은 같은 키의 global 값보다 우선합니다.
    """
    pet_id: int
    global_defaults: Dict[str, Any] = field(default_factory=seed_global_defaults)
    categories: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    last_updated: datetime = field(default_factory=DateTimeUtils.now)

    def merged(self, category: Optional[str]) -> Dict[str, Any]:
        merged = dict(self.global_defaults)
        if category:
            merged.update(self.categories.get(category, {}))
        return merged

    def to_dict(self) -> Dict[str, Any]:
        return {
            "petId": self.pet_id,
            "global": dict(self.global_defaults),
            "categories": {k: dict(v) for k, v in self.categories.items()},
            "lastUpdated": DateTimeUtils.to_iso_string(self.last_updated),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PetQuickDefaults":
        """
        저장소 문서로부터 인스턴스를 생성합니다.

        Raises:
            TypeError: 문서나 categories가 dict가 아닌 경우
            KeyError, ValueError: petId가 없거나 정수가 아닌 경우
        """
        if not isinstance(data, dict):
            raise TypeError(f"quick defaults document must be a dict, got {type(data).__name__}")
        categories = data.get('categories') or {}
        if not isinstance(categories, dict):
            raise TypeError("categories must be a dict")
        last_updated = data.get('lastUpdated')
        try:
            last_updated = DateTimeUtils.validate_datetime_field(last_updated, 'lastUpdated')
        except ValueError:
            last_updated = DateTimeUtils.now()
        return cls(
            pet_id=int(data['petId']),
            global_defaults=dict(data.get('global') or {}),
            categories={k: dict(v or {}) for k, v in categories.items()},
            last_updated=last_updated,
        )

@dataclass(frozen=True)
class UsageRecord:
    """
    learn_from_input / record_usage 호출 결과.
    count는 이번 호출 이후의 사용 횟수, promoted는 이번 호출로 카테고리 기본값이 갱신되었는지 여부입니다.
    """
    field: str
    value: Any
    count: int
    promoted: bool
