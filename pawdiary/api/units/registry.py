# pawdiary/api/units/registry.py
"""
측정 단위 카탈로그와 단위 변환 함수

- 카테고리마다 기준 단위(is_base_unit=True)가 정확히 하나 존재합니다.
- 나머지 단위는 "1 단위 = conversion_factor 기준 단위" 관계로 변환됩니다.
- 온도는 곱셈이 아닌 아핀 관계(°F = °C·9/5+32)이므로 별도로 처리합니다.
- count/serving 단위는 이름표일 뿐이므로 서로 변환되지 않습니다.

변환이 불가능한 경우(알 수 없는 단위, 다른 카테고리)는 예외가 아닌 None을 반환합니다.
화면 코드가 변환 가능 여부를 미리 시험해 보는 용도로 호출하기 때문입니다.
"""
import logging
from typing import Dict, List, Optional, Tuple

from pawdiary.models.unit import UnitDefinition, UnitCategory, NOMINAL_CATEGORIES

logger = logging.getLogger(__name__)

V, W, L, T = UnitCategory.VOLUME, UnitCategory.WEIGHT, UnitCategory.LENGTH, UnitCategory.TEMPERATURE

_UNITS = [
    # 부피 (기준: ml)
    UnitDefinition('ml', 'Milliliter', 'ml', V, is_base_unit=True),
    UnitDefinition('l', 'Liter', 'L', V, base_unit='ml', conversion_factor=1000),
    UnitDefinition('cup', 'Cup', 'c', V, base_unit='ml', conversion_factor=236.588),
    UnitDefinition('fl_oz', 'Fluid Ounce', 'fl oz', V, base_unit='ml', conversion_factor=29.5735),
    UnitDefinition('tbsp', 'Tablespoon', 'tbsp', V, base_unit='ml', conversion_factor=14.7868),
    UnitDefinition('tsp', 'Teaspoon', 'tsp', V, base_unit='ml', conversion_factor=4.92892),
    UnitDefinition('pt', 'Pint', 'pt', V, base_unit='ml', conversion_factor=473.176),
    UnitDefinition('qt', 'Quart', 'qt', V, base_unit='ml', conversion_factor=946.353),

    # 무게 (기준: g)
    UnitDefinition('g', 'Gram', 'g', W, is_base_unit=True),
    UnitDefinition('kg', 'Kilogram', 'kg', W, base_unit='g', conversion_factor=1000),
    UnitDefinition('mg', 'Milligram', 'mg', W, base_unit='g', conversion_factor=0.001),
    UnitDefinition('oz', 'Ounce', 'oz', W, base_unit='g', conversion_factor=28.3495),
    UnitDefinition('lb', 'Pound', 'lb', W, base_unit='g', conversion_factor=453.592),

    # 길이 (기준: cm)
    UnitDefinition('cm', 'Centimeter', 'cm', L, is_base_unit=True),
    UnitDefinition('m', 'Meter', 'm', L, base_unit='cm', conversion_factor=100),
    UnitDefinition('mm', 'Millimeter', 'mm', L, base_unit='cm', conversion_factor=0.1),
    UnitDefinition('in', 'Inch', 'in', L, base_unit='cm', conversion_factor=2.54),
    UnitDefinition('ft', 'Foot', 'ft', L, base_unit='cm', conversion_factor=30.48),

    # 온도 (기준: celsius, 아핀 변환)
    UnitDefinition('celsius', 'Celsius', '°C', T, is_base_unit=True),
    UnitDefinition('fahrenheit', 'Fahrenheit', '°F', T, base_unit='celsius'),

    # 개수 (변환 없음)
    UnitDefinition('piece', 'Piece', 'pcs', UnitCategory.COUNT, is_base_unit=True),
    UnitDefinition('treat', 'Treat', 'treats', UnitCategory.COUNT),
    UnitDefinition('kibble', 'Kibble', 'kibbles', UnitCategory.COUNT),
    UnitDefinition('tablet', 'Tablet', 'tabs', UnitCategory.COUNT),
    UnitDefinition('capsule', 'Capsule', 'caps', UnitCategory.COUNT),

    # 제공량 (변환 없음)
    UnitDefinition('portion', 'Portion', 'portions', UnitCategory.SERVING, is_base_unit=True),
    UnitDefinition('meal', 'Meal', 'meals', UnitCategory.SERVING),
    UnitDefinition('serving', 'Serving', 'servings', UnitCategory.SERVING),
    UnitDefinition('bowl', 'Bowl', 'bowls', UnitCategory.SERVING),
    UnitDefinition('scoop', 'Scoop', 'scoops', UnitCategory.SERVING),
]

UNIT_DEFINITIONS: Dict[str, UnitDefinition] = {unit.id: unit for unit in _UNITS}

# 표시용 단위 자동 전환 규칙: (원래 단위, 임계값, 전환할 단위)
_OPTIMAL_DISPLAY_RULES = [
    ('g', 1000, 'kg'),
    ('mg', 1000, 'g'),
    ('ml', 1000, 'l'),
    ('tsp', 3, 'tbsp'),
    ('mm', 10, 'cm'),
    ('cm', 100, 'm'),
]


def _category_of(category) -> Optional[UnitCategory]:
    if isinstance(category, UnitCategory):
        return category
    try:
        return UnitCategory(category)
    except ValueError:
        return None


def get_unit_definition(unit_id: str) -> Optional[UnitDefinition]:
    return UNIT_DEFINITIONS.get(unit_id)


def get_units_for_category(category) -> List[UnitDefinition]:
    """카테고리에 속한 단위 목록 (정의 순서 유지). 알 수 없는 카테고리는 빈 목록."""
    unit_category = _category_of(category)
    return [unit for unit in _UNITS if unit.category == unit_category]


def get_base_unit(category) -> Optional[UnitDefinition]:
    for unit in get_units_for_category(category):
        if unit.is_base_unit:
            return unit
    return None


def _convert_temperature(value: float, from_unit_id: str, to_unit_id: str) -> float:
    if from_unit_id == 'celsius' and to_unit_id == 'fahrenheit':
        return value * 9 / 5 + 32
    if from_unit_id == 'fahrenheit' and to_unit_id == 'celsius':
        return (value - 32) * 5 / 9
    return value


def _to_base(value: float, unit: UnitDefinition) -> Optional[float]:
    if unit.is_base_unit:
        return value
    if not unit.conversion_factor:
        return None
    return value * unit.conversion_factor


def _from_base(base_value: float, unit: UnitDefinition) -> Optional[float]:
    if unit.is_base_unit:
        return base_value
    if not unit.conversion_factor:
        return None
    return base_value / unit.conversion_factor


def convert_units(value: float, from_unit_id: str, to_unit_id: str) -> Optional[float]:
    """
    value를 from_unit_id에서 to_unit_id로 변환합니다.

    Returns:
        변환된 값. 같은 단위면 value 그대로.
        알 수 없는 단위, 다른 카테고리, 서로 다른 count/serving 단위이면 None.
    """
    from_unit = UNIT_DEFINITIONS.get(from_unit_id)
    to_unit = UNIT_DEFINITIONS.get(to_unit_id)

    if not from_unit or not to_unit:
        logger.warning(f"Unknown unit: {from_unit_id} or {to_unit_id}")
        return None

    if from_unit_id == to_unit_id:
        return value

    if from_unit.category != to_unit.category:
        logger.debug(f"Cannot convert between different categories: {from_unit.category.value} to {to_unit.category.value}")
        return None

    if from_unit.category == UnitCategory.TEMPERATURE:
        return _convert_temperature(value, from_unit_id, to_unit_id)

    if from_unit.category in NOMINAL_CATEGORIES:
        return None

    base_value = _to_base(value, from_unit)
    if base_value is None:
        return None
    return _from_base(base_value, to_unit)


def convert_to_optimal_display_unit(value: float, unit_id: str) -> Tuple[float, str]:
    """
    화면 표시용으로 더 읽기 좋은 단위로 바꿉니다 (예: 1500 g -> 1.5 kg).
    저장되는 값에는 절대 적용하지 않습니다.
    """
    if unit_id not in UNIT_DEFINITIONS:
        return value, unit_id

    for source, threshold, target in _OPTIMAL_DISPLAY_RULES:
        if unit_id == source and value >= threshold:
            converted = convert_units(value, source, target)
            if converted is not None and converted >= 1:
                return converted, target
            break

    return value, unit_id


def format_value_with_unit(value: float, unit_id: str, decimals: int = 2,
                           show_symbol: bool = True, show_label: bool = False) -> str:
    """값과 단위를 표시용 문자열로 만듭니다. 알 수 없는 단위는 숫자만 반환합니다."""
    unit = UNIT_DEFINITIONS.get(unit_id)
    if not unit:
        return str(value)

    formatted = f"{value:.{decimals}f}" if decimals > 0 else str(int(round(value)))

    if show_label:
        plural = 's' if value != 1 else ''
        return f"{formatted} {unit.label}{plural}"
    if show_symbol:
        return f"{formatted} {unit.symbol}"
    return formatted
