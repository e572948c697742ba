# pawdiary/api/templates/registry.py
import logging
from typing import List, Optional

from pawdiary.models.activity import ActivityTemplate, ActivityCategory
from .catalog import ACTIVITY_TEMPLATES

logger = logging.getLogger(__name__)


def _as_category(category) -> Optional[ActivityCategory]:
    if isinstance(category, ActivityCategory):
        return category
    try:
        return ActivityCategory(category)
    except ValueError:
        return None


class ActivityTemplateRegistry:
    """
    (category, subcategory) 쌍으로 활동 템플릿을 조회하는 레지스트리.
    템플릿은 정적 데이터이므로 읽기 전용으로만 사용합니다.
    """
    def __init__(self, templates: Optional[List[ActivityTemplate]] = None):
        self.templates = list(templates if templates is not None else ACTIVITY_TEMPLATES)
        self._by_id = {template.id: template for template in self.templates}
        invalid = [t.id for t in self.templates if not self.validate_template(t)]
        if invalid:
            logger.warning(f"Invalid activity templates registered: {invalid}")

    def get_template(self, template_id: str) -> Optional[ActivityTemplate]:
        return self._by_id.get(template_id)

    def get_all_templates(self) -> List[ActivityTemplate]:
        return list(self.templates)

    def get_templates_by_category(self, category) -> List[ActivityTemplate]:
        activity_category = _as_category(category)
        return [t for t in self.templates if t.category == activity_category]

    def get_templates_by_subcategory(self, category, subcategory: str) -> List[ActivityTemplate]:
        return [t for t in self.get_templates_by_category(category) if t.subcategory == subcategory]

    def search_templates(self, query: str) -> List[ActivityTemplate]:
        """라벨, 서브카테고리, 설명, 카테고리에 대해 대소문자 구분 없이 부분 일치 검색합니다."""
        term = (query or '').lower()
        return [
            t for t in self.templates
            if term in t.label.lower()
            or term in t.subcategory.lower()
            or term in (t.description or '').lower()
            or term in t.category.value.lower()
        ]

    def get_quick_log_templates(self) -> List[ActivityTemplate]:
        return [t for t in self.templates if t.is_quick_log_enabled]

    @staticmethod
    def get_all_categories() -> List[ActivityCategory]:
        return list(ActivityCategory)

    @staticmethod
    def validate_template(template: ActivityTemplate) -> bool:
        """필수 속성이 있고, 블록이 하나 이상이며, 블록 id가 템플릿 안에서 유일한지 확인합니다."""
        if not template.id or not template.category or not template.subcategory or not template.label:
            return False
        if not template.blocks:
            return False
        block_ids = [block.id for block in template.blocks]
        if len(set(block_ids)) != len(block_ids):
            return False
        return all(block.id and block.type and isinstance(block.required, bool) for block in template.blocks)

    @staticmethod
    def get_required_blocks(template: ActivityTemplate) -> List[str]:
        return [block.id for block in template.blocks if block.required]

    @staticmethod
    def get_optional_blocks(template: ActivityTemplate) -> List[str]:
        return [block.id for block in template.blocks if not block.required]
