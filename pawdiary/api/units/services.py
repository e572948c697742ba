# pawdiary/api/units/services.py
import copy
import logging
from typing import Optional, Tuple

from pawdiary.core.errors import StoreUnavailableError
from pawdiary.models.unit import UnitPreferences
from pawdiary.services.document_store import DocumentStore
from pawdiary.api.units.registry import (
    UNIT_DEFINITIONS, get_base_unit, convert_units
)

logger = logging.getLogger(__name__)

UNIT_PREFERENCES_KEY = 'unit_preferences'


class UnitPreferenceService:
    """
    카테고리별/반려동물별 선호 단위를 관리하는 서비스 클래스.

    해석 순서: 반려동물별 선호 -> 전역 기본값 -> 카테고리 기준 단위.
    저장소를 사용할 수 없으면 메모리 상태로 계속 동작하며(내구성 저하 모드),
    다음 쓰기 때 다시 저장을 시도합니다. 변경 작업은 저장소의 write_lock 안에서 실행됩니다.
    """
    def __init__(self, store: DocumentStore):
        self.store = store
        self.degraded = False
        self._preferences = self._load()
        logger.info("UnitPreferenceService initialized.")

    def _load(self) -> UnitPreferences:
        try:
            document = self.store.get(UNIT_PREFERENCES_KEY)
            self.degraded = False
        except StoreUnavailableError as e:
            logger.warning(f"Failed to load unit preferences, using in-memory defaults: {e}")
            self.degraded = True
            return UnitPreferences()
        if not document:
            return UnitPreferences()
        if not isinstance(document, dict):
            logger.warning(f"Ignoring malformed unit preferences document ({type(document).__name__})")
            return UnitPreferences()
        return UnitPreferences.from_dict(document)

    def _save(self) -> None:
        try:
            self.store.set(UNIT_PREFERENCES_KEY, self._preferences.to_dict())
            self.degraded = False
        except StoreUnavailableError as e:
            # 메모리 값은 유지하고 다음 변경 시 다시 저장을 시도합니다
            logger.warning(f"Failed to save unit preferences, keeping in-memory value: {e}")
            self.degraded = True

    def get_preferred_unit(self, category: str, pet_id: Optional[int] = None) -> str:
        """카테고리의 선호 단위 id를 반환합니다. 알 수 없는 카테고리는 빈 문자열."""
        if pet_id is not None:
            pet_units = self._preferences.pet_specific_units.get(pet_id, {})
            if pet_units.get(category):
                return pet_units[category]

        default_unit = self._preferences.default_units.get(category)
        if default_unit:
            return default_unit

        base_unit = get_base_unit(category)
        return base_unit.id if base_unit else ''

    def set_preferred_unit(self, category: str, unit_id: str, pet_id: Optional[int] = None) -> None:
        """
        선호 단위를 저장합니다. (category, pet_id) 쌍의 이전 값은 그대로 교체됩니다.

        Raises:
            ValueError: 알 수 없는 단위이거나 단위가 category에 속하지 않는 경우
        """
        unit = UNIT_DEFINITIONS.get(unit_id)
        if unit is None or unit.category.value != category:
            raise ValueError(f"'{unit_id}'은(는) '{category}' 카테고리의 단위가 아닙니다.")

        with self.store.write_lock:
            if pet_id is not None:
                self._preferences.pet_specific_units.setdefault(pet_id, {})[category] = unit_id
            else:
                self._preferences.default_units[category] = unit_id
            self._save()
        logger.info(f"Preferred unit set: {category} -> {unit_id} (pet: {pet_id})")

    def clear_unit_preferences(self, pet_id: Optional[int] = None) -> None:
        """pet_id가 주어지면 해당 반려동물의 선호만, 아니면 전체를 초기화합니다."""
        with self.store.write_lock:
            if pet_id is not None:
                self._preferences.pet_specific_units.pop(pet_id, None)
            else:
                self._preferences = UnitPreferences()
            self._save()

    def get_unit_preferences(self) -> UnitPreferences:
        """현재 선호 단위 테이블의 복사본."""
        with self.store.write_lock:
            return copy.deepcopy(self._preferences)

    def reload_unit_preferences(self) -> None:
        """외부에서 저장소가 변경된 경우 다시 읽어옵니다."""
        with self.store.write_lock:
            self._preferences = self._load()

    def convert_to_display_unit(self, value: float, unit_id: str, category: str,
                                pet_id: Optional[int] = None) -> Tuple[float, str]:
        """값을 사용자의 선호 단위로 변환합니다. 변환할 수 없으면 원래 값과 단위를 그대로 반환합니다."""
        preferred = self.get_preferred_unit(category, pet_id)
        if not preferred or preferred == unit_id:
            return value, unit_id

        converted = convert_units(value, unit_id, preferred)
        if converted is None:
            return value, unit_id
        return converted, preferred
