# pawdiary/api/quick_defaults/schemas.py
from marshmallow import Schema, fields, validate

from pawdiary.models.activity import ActivityCategory

CATEGORY_VALUES = [c.value for c in ActivityCategory]

class CategoryQuerySchema(Schema):
    category = fields.Str(load_default=None, validate=validate.OneOf(CATEGORY_VALUES))

class DefaultsUpdateSchema(Schema):
    """PATCH /quick-defaults 요청 본문. category가 없으면 전역 기본값을 수정합니다."""
    category = fields.Str(load_default=None, allow_none=True, validate=validate.OneOf(CATEGORY_VALUES))
    defaults = fields.Dict(keys=fields.Str(validate=validate.Length(min=1, max=50)), required=True)

class UsageRequestSchema(Schema):
    """POST /quick-defaults/usage 요청 본문"""
    category = fields.Str(required=True, validate=validate.OneOf(CATEGORY_VALUES))
    field = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    value = fields.Raw(required=True, allow_none=True)

class SuggestionQuerySchema(Schema):
    category = fields.Str(required=True, validate=validate.OneOf(CATEGORY_VALUES))
    field = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    limit = fields.Int(load_default=None, validate=validate.Range(min=1, max=50))

class UsageRecordSchema(Schema):
    field = fields.Str()
    value = fields.Raw()
    count = fields.Int()
    promoted = fields.Bool()
