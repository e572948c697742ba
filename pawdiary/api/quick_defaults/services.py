# pawdiary/api/quick_defaults/services.py
import copy
import logging
from collections import Counter
from typing import Any, Dict, List, Set

from pawdiary.core.errors import StoreUnavailableError
from pawdiary.models.quick_defaults import PetQuickDefaults, UsageRecord
from pawdiary.services.document_store import DocumentStore
from pawdiary.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

QUICK_DEFAULTS_KEY = 'quick_defaults'
USAGE_COUNT_PREFIX = 'usage-count-'
AUTO_LEARN_THRESHOLD = 3


def usage_key(pet_id: int, category: str, field: str, value: Any) -> str:
    # 1과 "1"처럼 문자열 표현이 같은 값은 타입 이름으로 구분
    if isinstance(value, str):
        return f"{USAGE_COUNT_PREFIX}{pet_id}-{category}-{field}-{value}"
    return f"{USAGE_COUNT_PREFIX}{pet_id}-{category}-{field}-{type(value).__name__}:{value}"


def is_blank(value: Any) -> bool:
    """None, 공백 문자열, 빈 컬렉션은 학습 대상이 아닙니다."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _is_counter_document(document: Any) -> bool:
    return (
        isinstance(document, dict)
        and isinstance(document.get("count"), int) and not isinstance(document.get("count"), bool)
        and "value" in document
    )


class QuickDefaultsService:
    """
    반려동물/카테고리별 빠른 기본값을 관리하고, 반복 입력값을 학습하는 서비스 클래스.

    - 기본값 문서 하나(quick_defaults)와 사용 횟수 문서들(usage-count-...)을 저장소에 보관합니다.
    - 같은 값이 threshold 회 이상 기록되면 해당 필드의 카테고리 기본값으로 승격됩니다.
    - 저장소 오류는 로그만 남기고 메모리 상태로 계속 동작합니다.
      실패한 쓰기와 삭제는 남겨두었다가 다음 변경 때 함께 다시 시도합니다.
    - 상태를 바꾸는 작업은 저장소의 write_lock 안에서 실행됩니다.
    """
    def __init__(self, store: DocumentStore, threshold: int = AUTO_LEARN_THRESHOLD):
        self.store = store
        self.threshold = threshold
        self.degraded = False
        self._defaults_dirty = False
        self._dirty_counters: Set[str] = set()
        self._pending_deletes: Set[str] = set()
        self._defaults: Dict[int, PetQuickDefaults] = self._load_defaults()
        self._counters: Dict[str, Dict[str, Any]] = self._load_counters()
        logger.info(f"QuickDefaultsService initialized (threshold: {threshold}).")

    # --- 저장소 입출력 ---

    def _load_defaults(self) -> Dict[int, PetQuickDefaults]:
        try:
            document = self.store.get(QUICK_DEFAULTS_KEY) or {}
        except StoreUnavailableError as e:
            logger.warning(f"Failed to load quick defaults, starting empty: {e}")
            self.degraded = True
            return {}

        if not isinstance(document, dict):
            logger.warning(f"Ignoring malformed quick defaults document ({type(document).__name__})")
            return {}

        defaults = {}
        for pet_key, pet_document in document.items():
            try:
                pet_defaults = PetQuickDefaults.from_dict(pet_document)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed quick defaults for pet '{pet_key}': {e}")
                continue
            defaults[pet_defaults.pet_id] = pet_defaults
        return defaults

    def _load_counters(self) -> Dict[str, Dict[str, Any]]:
        try:
            counters = {}
            for key in self.store.keys(USAGE_COUNT_PREFIX):
                document = self.store.get(key)
                if not document:
                    continue
                if not _is_counter_document(document):
                    logger.warning(f"Skipping malformed usage counter '{key}'")
                    continue
                counters[key] = document
            return counters
        except StoreUnavailableError as e:
            logger.warning(f"Failed to load usage counters, starting empty: {e}")
            self.degraded = True
            return {}

    def _flush(self) -> None:
        """밀린 삭제와 쓰기를 저장소에 반영합니다. 실패한 항목은 다음 호출 때 다시 시도합니다."""
        try:
            if self._defaults_dirty:
                document = {str(pet_id): defaults.to_dict() for pet_id, defaults in self._defaults.items()}
                self.store.set(QUICK_DEFAULTS_KEY, document)
                self._defaults_dirty = False
            for key in sorted(self._pending_deletes):
                self.store.delete(key)
                self._pending_deletes.discard(key)
            for key in sorted(self._dirty_counters):
                self.store.set(key, self._counters[key])
                self._dirty_counters.discard(key)
            self.degraded = False
        except StoreUnavailableError as e:
            logger.warning(f"Failed to persist quick defaults, keeping in-memory state: {e}")
            self.degraded = True

    def _save_defaults(self) -> None:
        self._defaults_dirty = True
        self._flush()

    def _save_counter(self, key: str) -> None:
        self._pending_deletes.discard(key)
        self._dirty_counters.add(key)
        self._flush()

    def _delete_keys(self, keys: List[str]) -> None:
        for key in keys:
            self._dirty_counters.discard(key)
            self._pending_deletes.add(key)
        self._flush()

    def _pet(self, pet_id: int) -> PetQuickDefaults:
        """처음 접근하는 반려동물은 기본 전역값으로 생성하여 저장합니다."""
        if pet_id not in self._defaults:
            self._defaults[pet_id] = PetQuickDefaults(pet_id=pet_id)
            self._save_defaults()
        return self._defaults[pet_id]

    # --- 기본값 조회/수정 ---

    def get_pet_defaults(self, pet_id: int) -> PetQuickDefaults:
        with self.store.write_lock:
            return copy.deepcopy(self._pet(pet_id))

    def get_category_defaults(self, pet_id: int, category: str) -> Dict[str, Any]:
        """전역 기본값 위에 카테고리 기본값을 덮어쓴 결과 (같은 키는 카테고리 값이 우선)."""
        with self.store.write_lock:
            return copy.deepcopy(self._pet(pet_id).merged(category))

    def update_global_defaults(self, pet_id: int, updates: Dict[str, Any]) -> None:
        with self.store.write_lock:
            pet_defaults = self._pet(pet_id)
            pet_defaults.global_defaults.update(updates)
            pet_defaults.last_updated = DateTimeUtils.now()
            self._save_defaults()

    def update_category_defaults(self, pet_id: int, category: str, updates: Dict[str, Any]) -> None:
        with self.store.write_lock:
            pet_defaults = self._pet(pet_id)
            pet_defaults.categories.setdefault(category, {}).update(updates)
            pet_defaults.last_updated = DateTimeUtils.now()
            self._save_defaults()

    # --- 학습 ---

    def record_usage(self, pet_id: int, category: str, field: str, value: Any) -> UsageRecord:
        """
        입력값 사용을 기록합니다.

        사용 횟수가 threshold에 도달하면 값이 카테고리 기본값으로 승격되며,
        그 여부를 반환값의 promoted로 알려줍니다. 빈 값은 기록하지 않습니다.
        """
        if is_blank(value):
            return UsageRecord(field=field, value=value, count=0, promoted=False)

        key = usage_key(pet_id, category, field, value)
        with self.store.write_lock:
            counter = self._counters.setdefault(key, {
                "petId": pet_id, "category": category, "field": field, "value": value, "count": 0,
            })
            counter["count"] += 1
            count = counter["count"]
            self._save_counter(key)

            promoted = False
            if count >= self.threshold:
                current = self._pet(pet_id).categories.get(category, {})
                if field not in current or current[field] != value:
                    self.update_category_defaults(pet_id, category, {field: value})
                    promoted = True
                    logger.info(f"Learned default for pet {pet_id}: {category}.{field} = {value!r}")

        return UsageRecord(field=field, value=value, count=count, promoted=promoted)

    learn_from_input = record_usage

    def get_smart_suggestions(self, pet_id: int, category: str, field: str, limit: int = 5) -> List[Any]:
        """사용 횟수 내림차순으로 정렬한 값 목록. 횟수가 같으면 값의 문자열 순서로 정렬합니다."""
        with self.store.write_lock:
            observed = [
                counter for counter in self._counters.values()
                if counter.get("petId") == pet_id and counter.get("category") == category
                and counter.get("field") == field
            ]
        observed.sort(key=lambda c: (-c["count"], str(c["value"])))
        return [counter["value"] for counter in observed[:max(limit, 0)]]

    # --- 초기화 ---

    def clear_for_pet(self, pet_id: int) -> None:
        """해당 반려동물의 기본값과 사용 횟수를 모두 삭제합니다. 다른 반려동물은 영향받지 않습니다."""
        with self.store.write_lock:
            self._defaults.pop(pet_id, None)
            keys = [key for key, counter in self._counters.items() if counter.get("petId") == pet_id]
            for key in keys:
                del self._counters[key]
            self._defaults_dirty = True
            self._delete_keys(keys)
        logger.info(f"Quick defaults cleared for pet {pet_id}")

    def clear_all(self) -> None:
        with self.store.write_lock:
            keys = list(self._counters)
            self._defaults.clear()
            self._counters.clear()
            self._defaults_dirty = True
            self._delete_keys(keys)

    # --- 통계/백업 ---

    def get_stats(self) -> Dict[str, Any]:
        with self.store.write_lock:
            pets = copy.deepcopy(list(self._defaults.values()))
        total_defaults = 0
        category_usage = Counter()
        for pet_defaults in pets:
            total_defaults += len(pet_defaults.global_defaults)
            for category, defaults in pet_defaults.categories.items():
                total_defaults += len(defaults)
                category_usage[category] += 1

        most_active = None
        if category_usage:
            most_active = sorted(category_usage.items(), key=lambda item: (-item[1], item[0]))[0][0]
        oldest = min((p.last_updated for p in pets), default=None)

        return {
            "totalPets": len(pets),
            "avgDefaultsPerPet": round(total_defaults / len(pets)) if pets else 0,
            "mostActiveCategory": most_active,
            "oldestDefaults": DateTimeUtils.to_iso_string(oldest) if oldest else None,
        }

    def export_data(self) -> Dict[str, Any]:
        """백업용 기본값 문서 ({petId: PetQuickDefaults 문서})."""
        with self.store.write_lock:
            return copy.deepcopy({str(pet_id): defaults.to_dict() for pet_id, defaults in self._defaults.items()})

    def import_data(self, data: Dict[str, Any]) -> None:
        """
        export_data 형식의 문서로 기본값을 교체합니다.

        Raises:
            ValueError: 문서 형식이 올바르지 않은 경우
        """
        imported = {}
        for pet_key, pet_document in data.items():
            try:
                pet_defaults = PetQuickDefaults.from_dict(pet_document)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise ValueError(f"반려동물 '{pet_key}'의 기본값 형식이 올바르지 않습니다: {e}")
            imported[pet_defaults.pet_id] = pet_defaults
        with self.store.write_lock:
            self._defaults = imported
            self._save_defaults()
