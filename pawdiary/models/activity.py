# pawdiary/models/activity.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

class ActivityCategory(Enum):
    HEALTH = "Health"
    GROWTH = "Growth"
    DIET = "Diet"
    LIFESTYLE = "Lifestyle"
    EXPENSE = "Expense"

class ActivityMode(Enum):
    QUICK = "quick"
    GUIDED = "guided"
    ADVANCED = "advanced"

class BlockType(Enum):
    """템플릿 안에서 사용할 수 있는 블록 종류 (닫힌 집합)."""
    TITLE = "title"
    NOTES = "notes"
    SUBCATEGORY = "subcategory"
    TIME = "time"
    MEASUREMENT = "measurement"
    RATING = "rating"
    PORTION = "portion"
    TIMER = "timer"
    LOCATION = "location"
    WEATHER = "weather"
    CHECKLIST = "checklist"
    ATTACHMENT = "attachment"
    COST = "cost"
    REMINDER = "reminder"
    PEOPLE = "people"
    RECURRENCE = "recurrence"

@dataclass(frozen=True)
class ActivityBlockDef:
    """템플릿 안의 필드 하나의 모양과 동작을 선언합니다. 템플릿에 포함된 이후에는 변경되지 않습니다."""
    id: str
    type: BlockType
    label: Optional[str] = None
    required: bool = False
    config: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "required": self.required,
            "config": self.config,
        }

@dataclass(frozen=True)
class ActivityTemplate:
    """
    (category, subcategory) 쌍에 연결된 블록 목록.
    blocks의 순서는 화면 표시 및 탭 순서를 결정하며, 블록 id는 템플릿 안에서 유일합니다.
    typed_variant는 이 템플릿의 기록이 어떤 타입 변형으로 저장되어야 하는지에 대한 명시적 힌트입니다.
    """
    id: str
    category: ActivityCategory
    subcategory: str
    label: str
    icon: str
    blocks: List[ActivityBlockDef]
    is_quick_log_enabled: bool = False
    description: Optional[str] = None
    typed_variant: Optional[str] = None

    def get_block(self, block_id: str) -> Optional[ActivityBlockDef]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "subcategory": self.subcategory,
            "label": self.label,
            "icon": self.icon,
            "blocks": [block.to_dict() for block in self.blocks],
            "isQuickLogEnabled": self.is_quick_log_enabled,
            "description": self.description,
            "typedVariant": self.typed_variant,
        }

@dataclass
class ActivityFormData:
    """
    사용자가 편집 중인 활동의 메모리 내 표현.
    blocks의 모든 키는 template_id가 가리키는 템플릿의 블록이어야 합니다.
    """
    pet_id: Optional[int]
    category: Optional[ActivityCategory]
    subcategory: str
    template_id: str
    blocks: Dict[str, Any]
    title: str
    activity_date: Optional[datetime]
    description: Optional[str] = None

    # 블록에서 추출한 구조화 데이터 (불러오기 시에만 채워짐)
    measurements: Optional[Dict[str, Any]] = None
    attachments: Optional[List[Any]] = None
    cost: Optional[Dict[str, Any]] = None
    reminder: Optional[Dict[str, Any]] = None
    recurrence: Optional[Dict[str, Any]] = None

@dataclass
class ActivityRecord:
    """
    저장소에 보관되는 활동 기록 문서 구조.
    id와 created_at은 최초 저장 시 한 번만 할당되며, updated_at은 저장할 때마다 갱신됩니다.
    """
    pet_id: int
    category: str
    subcategory: str
    title: str
    activity_date: str
    activity_data: Dict[str, Any]
    updated_at: str
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        저장소 문서로 변환합니다.
        신규 기록(id 없음)은 id/created_at 키 자체를 포함하지 않아 저장소가 할당하도록 합니다.
        """
        document = {
            "pet_id": self.pet_id,
            "category": self.category,
            "subcategory": self.subcategory,
            "title": self.title,
            "activity_date": self.activity_date,
            "activity_data": self.activity_data,
            "updated_at": self.updated_at,
        }
        if self.description is not None:
            document["description"] = self.description
        if self.id is not None:
            document["id"] = self.id
            document["created_at"] = self.created_at
        return document

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActivityRecord":
        return cls(
            id=data.get('id'),
            pet_id=data.get('pet_id'),
            category=data.get('category', ''),
            subcategory=data.get('subcategory') or '',
            title=data.get('title') or '',
            description=data.get('description'),
            activity_date=data.get('activity_date'),
            activity_data=data.get('activity_data') or {},
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )
