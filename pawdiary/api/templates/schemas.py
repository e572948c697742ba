# pawdiary/api/templates/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from pawdiary.models.activity import ActivityCategory

CATEGORY_VALUES = [c.value for c in ActivityCategory]

class TemplateQuerySchema(Schema):
    """GET /api/templates 쿼리 파라미터. subcategory는 category와 함께 사용해야 합니다."""
    category = fields.Str(validate=validate.OneOf(CATEGORY_VALUES))
    subcategory = fields.Str(validate=validate.Length(min=1, max=100))
    q = fields.Str(validate=validate.Length(min=1, max=100))

    @validates_schema
    def validate_subcategory(self, data, **kwargs):
        if data.get('subcategory') and not data.get('category'):
            raise ValidationError("subcategory를 사용하려면 category가 필요합니다.", "subcategory")

class BlockDefSchema(Schema):
    id = fields.Str()
    type = fields.Method("get_type")
    label = fields.Str(allow_none=True)
    required = fields.Bool()
    config = fields.Dict()

    def get_type(self, obj):
        return obj.type.value

class ActivityTemplateSchema(Schema):
    """템플릿 응답 스키마"""
    id = fields.Str()
    category = fields.Method("get_category")
    subcategory = fields.Str()
    label = fields.Str()
    icon = fields.Str()
    description = fields.Str(allow_none=True)
    isQuickLogEnabled = fields.Bool(attribute="is_quick_log_enabled")
    typedVariant = fields.Str(attribute="typed_variant", allow_none=True)
    blocks = fields.List(fields.Nested(BlockDefSchema))

    def get_category(self, obj):
        return obj.category.value
