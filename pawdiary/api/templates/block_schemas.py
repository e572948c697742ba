# pawdiary/api/templates/block_schemas.py
"""
블록 종류별 값 검증 스키마

title/notes/subcategory 블록은 문자열 값을, time 블록은 ISO 8601 문자열 값을 그대로 저장하므로
검증 전에 pre_load에서 {"value": ...} / {"date": ...} 모양으로 감싸서 검사합니다.
"""
import re
from typing import Any, Dict, List

from marshmallow import (
    Schema, fields, validate, pre_load, validates_schema, ValidationError, EXCLUDE
)

from pawdiary.models.activity import BlockType
from pawdiary.utils.datetime_utils import DateTimeUtils
from .blocks import (
    MAX_ATTACHMENTS, MAX_FILE_SIZE, SUPPORTED_ATTACHMENT_TYPES,
    SUPPORTED_CURRENCIES, TIMER_TYPES, RECURRENCE_TYPES
)

TIME_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')


def _utc(value):
    return DateTimeUtils.validate_datetime_field(value)


class BlockSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class TextBlockSchema(BlockSchema):
    """문자열 블록 공통: 문자열 값을 {"value": ...}로 감싸서 검증합니다."""
    @pre_load
    def wrap_text(self, data, **kwargs):
        if isinstance(data, str):
            return {"value": data}
        return data


class TitleBlockSchema(TextBlockSchema):
    value = fields.Str(required=True, validate=validate.Length(min=1, max=200))

    @validates_schema
    def validate_not_blank(self, data, **kwargs):
        if not data['value'].strip():
            raise ValidationError("This field is required", "value")


class NotesBlockSchema(TextBlockSchema):
    value = fields.Str(allow_none=True, validate=validate.Length(max=1000))


class SubcategoryBlockSchema(TitleBlockSchema):
    value = fields.Str(required=True, validate=validate.Length(min=1, max=100))


class TimeBlockSchema(BlockSchema):
    date = fields.DateTime(required=True)
    time = fields.Str(validate=validate.Regexp(TIME_PATTERN, error="Time must be in HH:MM format"))
    timezone = fields.Str()
    notes = fields.Str(validate=validate.Length(max=200))

    @pre_load
    def wrap_date(self, data, **kwargs):
        if isinstance(data, str):
            return {"date": data}
        return data


class MeasurementBlockSchema(BlockSchema):
    value = fields.Float(required=True, validate=validate.Range(min=0.01, error="Must be greater than 0"))
    unit = fields.Str(required=True, validate=validate.Length(min=1, max=20))
    measurementType = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    notes = fields.Str(validate=validate.Length(max=200))

    @validates_schema
    def validate_range_for_type(self, data, **kwargs):
        value = data['value']
        if data['measurementType'] == 'weight' and value > 200:
            raise ValidationError("Measurement value is outside acceptable range for this type", "value")
        if data['measurementType'] == 'temperature' and not (-50 <= value <= 100):
            raise ValidationError("Measurement value is outside acceptable range for this type", "value")


class RatingBlockSchema(BlockSchema):
    value = fields.Float(required=True, validate=validate.Range(min=1, max=10))
    scale = fields.Int(required=True, validate=validate.Range(min=1, max=10))
    ratingType = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    notes = fields.Str(validate=validate.Length(max=200))

    @validates_schema
    def validate_within_scale(self, data, **kwargs):
        if data['value'] > data['scale']:
            raise ValidationError("Rating value cannot exceed the scale maximum", "value")


class PortionBlockSchema(BlockSchema):
    amount = fields.Float(required=True, validate=validate.Range(min=0.01, error="Must be greater than 0"))
    unit = fields.Str(required=True, validate=validate.Length(min=1, max=20))
    portionType = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    brand = fields.Str(allow_none=True, validate=validate.Length(max=100))
    notes = fields.Str(validate=validate.Length(max=200))


class TimerBlockSchema(BlockSchema):
    type = fields.Str(required=True, validate=validate.OneOf(TIMER_TYPES))
    duration = fields.Float(validate=validate.Range(min=0))
    startTime = fields.DateTime()
    endTime = fields.DateTime()
    notes = fields.Str(validate=validate.Length(max=200))

    @validates_schema
    def validate_timer(self, data, **kwargs):
        if data['type'] == 'duration' and not data.get('duration'):
            raise ValidationError("Duration is required for duration timers", "duration")
        start, end = data.get('startTime'), data.get('endTime')
        if data['type'] == 'start_end' and (start is None or end is None):
            raise ValidationError("Start and end times are required", "endTime")
        if start is not None and end is not None and _utc(end) <= _utc(start):
            raise ValidationError("End time must be after start time", "endTime")


class CoordinatesSchema(BlockSchema):
    lat = fields.Float(required=True, validate=validate.Range(min=-90, max=90))
    lng = fields.Float(required=True, validate=validate.Range(min=-180, max=180))


class LocationBlockSchema(BlockSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    address = fields.Str(validate=validate.Length(max=300))
    coordinates = fields.Nested(CoordinatesSchema)
    notes = fields.Str(validate=validate.Length(max=200))


class WeatherBlockSchema(BlockSchema):
    temperature = fields.Float(validate=validate.Range(min=-50, max=60))
    temperatureUnit = fields.Str(required=True, validate=validate.OneOf(['C', 'F']))
    conditions = fields.Str(validate=validate.Length(max=100))
    description = fields.Str(validate=validate.Length(max=200))


class ChecklistItemSchema(BlockSchema):
    id = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    text = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    checked = fields.Bool(required=True)
    notes = fields.Str(validate=validate.Length(max=200))


class ChecklistBlockSchema(BlockSchema):
    items = fields.List(fields.Nested(ChecklistItemSchema), required=True,
                        validate=validate.Length(min=1, error="At least one item is required"))
    checklistType = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    notes = fields.Str(validate=validate.Length(max=200))

    @validates_schema
    def validate_unique_ids(self, data, **kwargs):
        ids = [item['id'] for item in data['items']]
        if len(set(ids)) != len(ids):
            raise ValidationError("Checklist items must have unique IDs", "items")


class AttachmentSchema(BlockSchema):
    id = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    filename = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    originalName = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    mimeType = fields.Str(required=True, validate=validate.OneOf(SUPPORTED_ATTACHMENT_TYPES, error="File type is not supported"))
    size = fields.Int(required=True, validate=validate.Range(min=1, max=MAX_FILE_SIZE, error="File size cannot exceed 10MB"))
    path = fields.Str(required=True, validate=validate.Length(min=1, max=500))
    thumbnailPath = fields.Str(validate=validate.Length(max=500))
    uploadedAt = fields.DateTime(required=True)
    description = fields.Str(validate=validate.Length(max=300))
    ocrText = fields.Str(validate=validate.Length(max=5000))


class AttachmentBlockSchema(BlockSchema):
    """첨부 블록 값은 첨부 목록 자체이므로 {"items": [...]}로 감싸서 검증합니다."""
    items = fields.List(fields.Nested(AttachmentSchema), required=True,
                        validate=validate.Length(max=MAX_ATTACHMENTS, error="Cannot have more than 10 attachments"))

    @pre_load
    def wrap_list(self, data, **kwargs):
        if isinstance(data, list):
            return {"items": data}
        return data


class CostBlockSchema(BlockSchema):
    amount = fields.Float(required=True, validate=validate.Range(min=0.01, error="Must be greater than 0"))
    currency = fields.Str(required=True, validate=validate.Length(equal=3, error="Currency code must be 3 characters"))
    category = fields.Str(validate=validate.Length(max=50))
    description = fields.Str(validate=validate.Length(max=200))
    receiptPhoto = fields.Str(validate=validate.Length(max=500))
    notes = fields.Str(validate=validate.Length(max=200))

    @validates_schema
    def validate_currency(self, data, **kwargs):
        if data['currency'].upper() not in SUPPORTED_CURRENCIES:
            raise ValidationError("Currency code is not supported", "currency")


class ContactSchema(BlockSchema):
    phone = fields.Str(validate=validate.Regexp(r'^[\+]?[1-9][\d]{0,15}$', error="Invalid phone number"))
    email = fields.Email()
    address = fields.Str(validate=validate.Length(max=300))


class PersonSchema(BlockSchema):
    id = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    type = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    contact = fields.Nested(ContactSchema)
    rating = fields.Int(validate=validate.Range(min=1, max=5))
    notes = fields.Str(validate=validate.Length(max=300))


class PeopleBlockSchema(BlockSchema):
    people = fields.List(fields.Nested(PersonSchema), required=True,
                         validate=validate.Length(min=1, error="At least one person is required"))
    notes = fields.Str(validate=validate.Length(max=200))

    @validates_schema
    def validate_unique_ids(self, data, **kwargs):
        ids = [person['id'] for person in data['people']]
        if len(set(ids)) != len(ids):
            raise ValidationError("People must have unique IDs", "people")


class RecurrencePatternSchema(BlockSchema):
    type = fields.Str(required=True, validate=validate.OneOf(RECURRENCE_TYPES))
    interval = fields.Int(required=True, validate=validate.Range(min=1, max=365))
    daysOfWeek = fields.List(fields.Int(validate=validate.Range(min=0, max=6)))
    dayOfMonth = fields.Int(validate=validate.Range(min=1, max=31))
    endDate = fields.DateTime()
    maxOccurrences = fields.Int(validate=validate.Range(min=1, max=100))


class RecurrenceBlockSchema(BlockSchema):
    pattern = fields.Nested(RecurrencePatternSchema, required=True)
    startDate = fields.DateTime(required=True)
    endDate = fields.DateTime()
    maxOccurrences = fields.Int(validate=validate.Range(min=1, max=100))
    notes = fields.Str(validate=validate.Length(max=200))

    @validates_schema
    def validate_bounds(self, data, **kwargs):
        end = data.get('endDate')
        if end is not None and _utc(end) <= _utc(data["startDate"]):
            raise ValidationError("End date must be after start date", "endDate")
        if end is None and not data.get('maxOccurrences'):
            raise ValidationError("Recurrence must have an end date or maximum number of occurrences")


class ReminderBlockSchema(BlockSchema):
    type = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    title = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(validate=validate.Length(max=300))
    reminderDate = fields.DateTime(required=True)
    reminderTime = fields.Str(validate=validate.Regexp(TIME_PATTERN, error="Time must be in HH:MM format"))
    repeat = fields.Nested(RecurrenceBlockSchema)
    isEnabled = fields.Bool(required=True)

    @validates_schema
    def validate_future_date(self, data, **kwargs):
        reminder_date = DateTimeUtils.validate_datetime_field(data['reminderDate'], 'reminderDate')
        if reminder_date <= DateTimeUtils.now():
            raise ValidationError("Date must be in the future", "reminderDate")


BLOCK_DATA_SCHEMAS: Dict[BlockType, Schema] = {
    BlockType.TITLE: TitleBlockSchema(),
    BlockType.NOTES: NotesBlockSchema(),
    BlockType.TIME: TimeBlockSchema(),
    BlockType.SUBCATEGORY: SubcategoryBlockSchema(),
    BlockType.MEASUREMENT: MeasurementBlockSchema(),
    BlockType.RATING: RatingBlockSchema(),
    BlockType.PORTION: PortionBlockSchema(),
    BlockType.TIMER: TimerBlockSchema(),
    BlockType.LOCATION: LocationBlockSchema(),
    BlockType.WEATHER: WeatherBlockSchema(),
    BlockType.CHECKLIST: ChecklistBlockSchema(),
    BlockType.ATTACHMENT: AttachmentBlockSchema(),
    BlockType.COST: CostBlockSchema(),
    BlockType.REMINDER: ReminderBlockSchema(),
    BlockType.PEOPLE: PeopleBlockSchema(),
    BlockType.RECURRENCE: RecurrenceBlockSchema(),
}


def validate_block_data(block_type, data: Any) -> Dict[str, Any]:
    """
    블록 값을 해당 종류의 스키마로 검증합니다.

    Raises:
        ValueError: 알 수 없는 블록 종류
        ValidationError: 값이 스키마에 맞지 않는 경우
    """
    kind = block_type if isinstance(block_type, BlockType) else BlockType(block_type)
    schema = BLOCK_DATA_SCHEMAS.get(kind)
    if schema is None:
        raise ValueError(f"No validation schema found for block type: {kind.value}")
    return schema.load(data)


def _flatten_messages(messages) -> List[str]:
    if isinstance(messages, str):
        return [messages]
    if isinstance(messages, dict):
        return [m for value in messages.values() for m in _flatten_messages(value)]
    return [m for value in messages for m in _flatten_messages(value)]


def get_block_validation_errors(block_type, data: Any) -> List[str]:
    """검증 오류 메시지 목록. 유효하면 빈 목록입니다."""
    try:
        validate_block_data(block_type, data)
    except ValidationError as err:
        return _flatten_messages(err.messages)
    return []


def is_block_data_valid(block_type, data: Any) -> bool:
    return not get_block_validation_errors(block_type, data)
