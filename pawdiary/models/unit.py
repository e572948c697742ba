# pawdiary/models/unit.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Any
import logging

class UnitCategory(Enum):
    VOLUME = "volume"
    WEIGHT = "weight"
    LENGTH = "length"
    TEMPERATURE = "temperature"
    COUNT = "count"
    SERVING = "serving"

# 서로 변환되지 않는 이름표 성격의 카테고리
NOMINAL_CATEGORIES = (UnitCategory.COUNT, UnitCategory.SERVING)

@dataclass(frozen=True)
class UnitDefinition:
    """
    측정 단위 정의. 프로세스 시작 시 정의되며 변경되지 않습니다.
    conversion_factor는 "1 단위 = conversion_factor 기준 단위"를 뜻합니다.
    """
    id: str
    label: str
    symbol: str
    category: UnitCategory
    base_unit: Optional[str] = None
    conversion_factor: Optional[float] = None
    is_base_unit: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "symbol": self.symbol,
            "category": self.category.value,
            "baseUnit": self.base_unit,
            "conversionFactor": self.conversion_factor,
            "isBaseUnit": self.is_base_unit,
        }

def default_unit_choices() -> Dict[str, str]:
    """선호 단위 문서가 처음 만들어질 때의 카테고리별 기본 단위."""
    return {
        "volume": "cup",
        "weight": "g",
        "length": "cm",
        "temperature": "celsius",
    }

@dataclass
class UnitPreferences:
    """
    저장소의 'unit_preferences' 문서 구조.
    default_units: category -> unit_id
    pet_specific_units: pet_id -> category -> unit_id
    """
    default_units: Dict[str, str] = field(default_factory=default_unit_choices)
    pet_specific_units: Dict[int, Dict[str, str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        # JSON 문서의 키는 문자열이어야 하므로 pet_id를 문자열로 저장
        return {
            "defaultUnits": dict(self.default_units),
            "petSpecificUnits": {
                str(pet_id): dict(units) for pet_id, units in self.pet_specific_units.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnitPreferences":
        """저장소 문서로부터 UnitPreferences 인스턴스를 생성합니다. 잘못된 pet_id 키는 건너뜁니다."""
        default_units = data.get('defaultUnits')
        if not isinstance(default_units, dict):
            default_units = default_unit_choices()

        pet_specific_units: Dict[int, Dict[str, str]] = {}
        raw_pet_units = data.get('petSpecificUnits') or {}
        if not isinstance(raw_pet_units, dict):
            logging.warning("Ignoring malformed petSpecificUnits in unit preferences")
            raw_pet_units = {}
        for raw_pet_id, units in raw_pet_units.items():
            try:
                pet_id = int(raw_pet_id)
            except (TypeError, ValueError):
                logging.warning(f"Ignoring unit preferences for invalid pet id '{raw_pet_id}'")
                continue
            if isinstance(units, dict):
                pet_specific_units[pet_id] = dict(units)

        return cls(default_units=dict(default_units), pet_specific_units=pet_specific_units)
