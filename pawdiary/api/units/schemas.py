# pawdiary/api/units/schemas.py
from marshmallow import Schema, fields, validate

from pawdiary.models.unit import UnitCategory

CATEGORY_VALUES = [c.value for c in UnitCategory]

class UnitDefinitionSchema(Schema):
    """단위 선택 목록에 사용할 단위 정의 응답 스키마."""
    id = fields.Str()
    label = fields.Str()
    symbol = fields.Str()
    category = fields.Method("get_category")
    baseUnit = fields.Str(attribute="base_unit", allow_none=True)
    conversionFactor = fields.Float(attribute="conversion_factor", allow_none=True)
    isBaseUnit = fields.Bool(attribute="is_base_unit")

    def get_category(self, obj):
        return obj.category.value

class UnitListQuerySchema(Schema):
    """GET /api/units 쿼리 파라미터."""
    category = fields.Str(validate=validate.OneOf(CATEGORY_VALUES))

class UnitConversionRequestSchema(Schema):
    """POST /api/units/convert 요청 본문."""
    value = fields.Float(required=True)
    from_unit = fields.Str(required=True, data_key="fromUnit")
    to_unit = fields.Str(required=True, data_key="toUnit")
    optimal = fields.Bool(load_default=False)

class UnitPreferenceUpdateSchema(Schema):
    """PUT /api/units/preferences 요청 본문."""
    category = fields.Str(required=True, validate=validate.OneOf(CATEGORY_VALUES))
    unit_id = fields.Str(required=True, data_key="unitId")
    pet_id = fields.Int(load_default=None, allow_none=True, data_key="petId", validate=validate.Range(min=1))

class PetIdQuerySchema(Schema):
    pet_id = fields.Int(load_default=None, data_key="pet_id", validate=validate.Range(min=1))
