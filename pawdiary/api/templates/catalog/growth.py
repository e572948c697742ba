# pawdiary/api/templates/catalog/growth.py
from pawdiary.models.activity import ActivityTemplate, ActivityCategory, BlockType
from pawdiary.api.templates.blocks import block

GROWTH_TEMPLATES = [
    ActivityTemplate(
        id='growth.weight',
        category=ActivityCategory.GROWTH,
        subcategory='Weight',
        label='Weight Check',
        icon='⚖️',
        is_quick_log_enabled=True,
        description='Record weight measurements for growth tracking',
        typed_variant='Weight',
        blocks=[
            block('time', BlockType.TIME, 'Measurement Time', required=True),
            block('weight', BlockType.MEASUREMENT, 'Weight', required=True,
                  measurementType='weight', units=['kg', 'g', 'lb'], defaultUnit='kg',
                  min=0.001, max=200, precision=3),
            block('notes', BlockType.NOTES, 'Growth Notes', maxLength=300,
                  placeholder='Body condition, comparison to last measurement...'),
            block('attachment', BlockType.ATTACHMENT, 'Progress Photos', maxFiles=2),
        ],
    ),
    ActivityTemplate(
        id='growth.height',
        category=ActivityCategory.GROWTH,
        subcategory='Height',
        label='Height/Length Check',
        icon='📏',
        description='Measure height, length, or body dimensions',
        typed_variant='Height',
        blocks=[
            block('time', BlockType.TIME, 'Measurement Time', required=True),
            block('height', BlockType.MEASUREMENT, 'Height/Length', required=True,
                  measurementType='height', units=['cm', 'in', 'm'], defaultUnit='cm',
                  min=1, max=200, precision=0.1),
            block('notes', BlockType.NOTES, 'Measurement Notes', maxLength=300),
            block('attachment', BlockType.ATTACHMENT, 'Measurement Photos', maxFiles=2),
        ],
    ),
    ActivityTemplate(
        id='growth.milestone',
        category=ActivityCategory.GROWTH,
        subcategory='Milestone',
        label='Development Milestone',
        icon='🎯',
        description='Track developmental milestones and growth stages',
        blocks=[
            block('time', BlockType.TIME, 'Date Achieved', required=True, showTime=False),
            block('title', BlockType.TITLE, 'Milestone', required=True, maxLength=150,
                  autocomplete=['First walk outdoors', 'House trained', 'Learned to sit',
                                'Learned to stay', 'First grooming', 'Lost puppy teeth']),
            block('checklist', BlockType.CHECKLIST, 'Development Markers',
                  checklistType='milestone',
                  predefinedItems=['Shows consistent behavior', 'Responds reliably to command',
                                   'Demonstrates skill independently', 'No accidents or setbacks']),
            block('notes', BlockType.NOTES, 'Milestone Details'),
            block('attachment', BlockType.ATTACHMENT, 'Milestone Photos/Videos', maxFiles=5),
        ],
    ),
]
