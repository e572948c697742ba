# pawdiary/api/activities/schemas.py
from marshmallow import Schema, fields, validate, post_load, EXCLUDE

from pawdiary.models.activity import ActivityCategory, ActivityFormData
from pawdiary.utils.datetime_utils import DateTimeUtils

CATEGORY_VALUES = [c.value for c in ActivityCategory]

class ActivityFormSchema(Schema):
    """
    활동 생성/수정 요청 본문 스키마.
    필수 필드 누락과 날짜 형식은 여기서 거르지 않고 매퍼가 MappingError(field 포함)로 보고합니다.
    """
    class Meta:
        unknown = EXCLUDE

    pet_id = fields.Int(data_key="petId", load_default=None, allow_none=True)
    category = fields.Str(load_default=None, allow_none=True, validate=validate.OneOf(CATEGORY_VALUES))
    subcategory = fields.Str(load_default='', allow_none=True)
    template_id = fields.Str(data_key="templateId", load_default='', allow_none=True)
    title = fields.Str(load_default='', allow_none=True)
    description = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=1000))
    activity_date = fields.Str(data_key="activityDate", load_default=None, allow_none=True)
    blocks = fields.Dict(keys=fields.Str(), load_default=dict)

    @post_load
    def make_form(self, data, **kwargs):
        return ActivityFormData(
            pet_id=data['pet_id'],
            category=ActivityCategory(data['category']) if data['category'] else None,
            subcategory=data['subcategory'] or '',
            template_id=data['template_id'] or '',
            blocks=data['blocks'],
            title=data['title'] or '',
            description=data['description'],
            activity_date=data['activity_date'],
        )

class ActivityFormResponseSchema(Schema):
    """편집용 폼 데이터 응답 스키마"""
    petId = fields.Int(attribute="pet_id")
    category = fields.Method("get_category")
    subcategory = fields.Str()
    templateId = fields.Str(attribute="template_id")
    title = fields.Str()
    description = fields.Str(allow_none=True)
    activityDate = fields.Method("get_activity_date")
    blocks = fields.Dict()
    measurements = fields.Dict(allow_none=True)
    attachments = fields.List(fields.Raw(), allow_none=True)
    cost = fields.Dict(allow_none=True)
    reminder = fields.Dict(allow_none=True)
    recurrence = fields.Dict(allow_none=True)

    def get_category(self, obj):
        return obj.category.value if obj.category else None

    def get_activity_date(self, obj):
        return DateTimeUtils.to_iso_string(obj.activity_date) if obj.activity_date else None
