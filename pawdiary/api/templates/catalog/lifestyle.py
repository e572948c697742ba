# pawdiary/api/templates/catalog/lifestyle.py
from pawdiary.models.activity import ActivityTemplate, ActivityCategory, BlockType
from pawdiary.api.templates.blocks import block

ACTIVITY_TYPES = [
    'Walking', 'Running', 'Playing', 'Training', 'Grooming', 'Resting',
    'Swimming', 'Hiking', 'Socializing', 'Learning', 'Exploring', 'Other',
]
TRAINING_SKILLS = [
    'Sit', 'Stay', 'Down', 'Come', 'Heel', 'Shake',
    'Fetch', 'Wait', 'Touch', 'Spin', 'Bow', 'Other',
]

LIFESTYLE_TEMPLATES = [
    ActivityTemplate(
        id='lifestyle.walk',
        category=ActivityCategory.LIFESTYLE,
        subcategory='Walk',
        label='Walk & Exercise',
        icon='🦮',
        is_quick_log_enabled=True,
        description='Log walks, runs, and outdoor exercise',
        blocks=[
            block('time', BlockType.TIME, 'Start Time', required=True),
            block('timer', BlockType.TIMER, 'Duration', required=True),
            block('location', BlockType.LOCATION, 'Route/Place'),
            block('weather', BlockType.WEATHER, 'Weather'),
            block('rating', BlockType.RATING, 'Energy Level', ratingType='energy'),
            block('notes', BlockType.NOTES, 'Walk Notes', maxLength=300,
                  placeholder='Met other dogs, pulled on leash, explored new trail...'),
        ],
    ),
    ActivityTemplate(
        id='lifestyle.training',
        category=ActivityCategory.LIFESTYLE,
        subcategory='Training',
        label='Training Session',
        icon='🎓',
        description='Track training sessions and skill progress',
        blocks=[
            block('time', BlockType.TIME, 'Session Time', required=True),
            block('title', BlockType.TITLE, 'Skill Practiced', required=True, maxLength=100,
                  autocomplete=TRAINING_SKILLS),
            block('timer', BlockType.TIMER, 'Session Length'),
            block('rating', BlockType.RATING, 'Progress', ratingType='progress'),
            block('checklist', BlockType.CHECKLIST, 'Commands Practiced',
                  checklistType='training', predefinedItems=TRAINING_SKILLS[:-1]),
            block('recurrence', BlockType.RECURRENCE, 'Practice Schedule'),
            block('notes', BlockType.NOTES, 'Session Notes'),
        ],
    ),
]
