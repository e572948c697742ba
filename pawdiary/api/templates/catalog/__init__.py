# pawdiary/api/templates/catalog/__init__.py
from .diet import DIET_TEMPLATES
from .growth import GROWTH_TEMPLATES
from .health import HEALTH_TEMPLATES
from .lifestyle import LIFESTYLE_TEMPLATES
from .expense import EXPENSE_TEMPLATES

ACTIVITY_TEMPLATES = [
    *DIET_TEMPLATES,
    *GROWTH_TEMPLATES,
    *HEALTH_TEMPLATES,
    *LIFESTYLE_TEMPLATES,
    *EXPENSE_TEMPLATES,
]

__all__ = ['ACTIVITY_TEMPLATES']
