# pawdiary/api/templates/blocks.py
"""
블록 종류 카탈로그

각 블록 종류가 기본으로 사용하는 설정값과 블록 값의 모양을 정의합니다.
템플릿 데이터는 이 기본 설정 위에 필요한 항목만 덮어써서 블록을 선언합니다.
"""
from typing import Any, Dict, Optional

from pawdiary.models.activity import ActivityBlockDef, BlockType

MAX_ATTACHMENTS = 10
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
SUPPORTED_ATTACHMENT_TYPES = [
    'image/jpeg', 'image/jpg', 'image/png', 'image/webp', 'image/bmp',
    'application/pdf', 'text/plain',
]
SUPPORTED_CURRENCIES = ['USD', 'CNY', 'EUR', 'GBP', 'JPY', 'CAD', 'AUD']
TIMER_TYPES = ['duration', 'stopwatch', 'start_end']
RECURRENCE_TYPES = ['daily', 'weekly', 'monthly', 'yearly', 'custom']

DEFAULT_BLOCK_CONFIGS: Dict[BlockType, Dict[str, Any]] = {
    BlockType.TITLE: {"maxLength": 200},
    BlockType.NOTES: {"maxLength": 500, "placeholder": "Add notes..."},
    BlockType.SUBCATEGORY: {},
    BlockType.TIME: {"showDate": True, "showTime": True, "defaultToNow": True, "allowFuture": False},
    BlockType.MEASUREMENT: {
        "measurementType": "weight", "units": ["kg", "g", "lb"], "defaultUnit": "kg",
        "min": 0.1, "max": 200, "precision": 1,
    },
    BlockType.RATING: {"scale": 5, "showEmojis": True, "ratingType": "mood"},
    BlockType.PORTION: {
        "portionTypes": ["cup", "bowl", "treat", "meal"], "units": ["g", "ml", "cup", "piece"],
        "defaultUnit": "g", "showBrand": True,
    },
    BlockType.TIMER: {"timerType": "duration"},
    BlockType.LOCATION: {"useGPS": True},
    BlockType.WEATHER: {"temperatureUnit": "C"},
    BlockType.CHECKLIST: {"allowCustomItems": True, "maxItems": 10},
    BlockType.ATTACHMENT: {
        "maxFiles": MAX_ATTACHMENTS, "allowedTypes": SUPPORTED_ATTACHMENT_TYPES,
        "maxFileSize": MAX_FILE_SIZE, "showOCR": False, "allowReordering": True,
    },
    BlockType.COST: {"currencies": SUPPORTED_CURRENCIES, "defaultCurrency": "USD"},
    BlockType.REMINDER: {"defaultEnabled": True},
    BlockType.PEOPLE: {"allowMultiple": True},
    BlockType.RECURRENCE: {"types": RECURRENCE_TYPES},
}

# 블록 값의 모양: 'text'는 문자열 그대로, 'object'는 dict, 'list'는 dict 목록
VALUE_SHAPES: Dict[BlockType, str] = {
    BlockType.TITLE: 'text',
    BlockType.NOTES: 'text',
    BlockType.SUBCATEGORY: 'text',
    BlockType.TIME: 'text',
    BlockType.ATTACHMENT: 'list',
}


def value_shape(block_type: BlockType) -> str:
    return VALUE_SHAPES.get(block_type, 'object')


def block(block_id: str, block_type: BlockType, label: Optional[str] = None,
          required: bool = False, **config) -> ActivityBlockDef:
    """기본 설정에 config 인자를 덮어써서 블록 정의를 만듭니다."""
    merged = dict(DEFAULT_BLOCK_CONFIGS.get(block_type, {}))
    merged.update(config)
    return ActivityBlockDef(id=block_id, type=block_type, label=label, required=required, config=merged)
