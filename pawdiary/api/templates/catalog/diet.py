# pawdiary/api/templates/catalog/diet.py
from pawdiary.models.activity import ActivityTemplate, ActivityCategory, BlockType
from pawdiary.api.templates.blocks import block

DIET_TEMPLATES = [
    ActivityTemplate(
        id='diet.feeding',
        category=ActivityCategory.DIET,
        subcategory='Feeding',
        label='Feeding',
        icon='🍽️',
        is_quick_log_enabled=True,
        description='Record feeding sessions with food type, portion, and timing',
        typed_variant='Feeding',
        blocks=[
            block('title', BlockType.TITLE, 'Meal Description', required=True,
                  placeholder='Breakfast, lunch, dinner, snack...', maxLength=100,
                  autocomplete=['Breakfast', 'Lunch', 'Dinner', 'Morning Snack', 'Evening Snack', 'Treat']),
            block('time', BlockType.TIME, 'Feeding Time', required=True, showPresets=True),
            block('portion', BlockType.PORTION, 'Portion Size', required=True,
                  portionTypes=['meal', 'snack', 'treat', 'supplement'],
                  units=['g', 'cup', 'ml', 'piece'], defaultUnit='g'),
            block('notes', BlockType.NOTES, 'Food Notes',
                  placeholder='Food brand, flavor, appetite level...'),
            block('attachment', BlockType.ATTACHMENT, 'Photos', maxFiles=3),
        ],
    ),
    ActivityTemplate(
        id='diet.water',
        category=ActivityCategory.DIET,
        subcategory='Water',
        label='Water Intake',
        icon='💧',
        is_quick_log_enabled=True,
        description='Track daily water consumption',
        typed_variant='WaterIntake',
        blocks=[
            block('time', BlockType.TIME, 'Time', required=True),
            block('portion', BlockType.PORTION, 'Water Amount', required=True,
                  portionTypes=['bowl', 'bottle', 'fountain'],
                  units=['ml', 'cup', 'fl_oz'], defaultUnit='ml', showBrand=False),
            block('notes', BlockType.NOTES, 'Notes', maxLength=200,
                  placeholder='Water source, eagerness to drink...'),
        ],
    ),
    ActivityTemplate(
        id='diet.treat',
        category=ActivityCategory.DIET,
        subcategory='Treat',
        label='Treats & Rewards',
        icon='🦴',
        is_quick_log_enabled=True,
        description='Log treats, rewards, and special snacks',
        blocks=[
            block('time', BlockType.TIME, 'Time', required=True),
            block('title', BlockType.TITLE, 'Treat Type', required=True, maxLength=100,
                  autocomplete=['Training treat', 'Dental chew', 'Biscuit', 'Bone', 'Fruit', 'Vegetable']),
            block('portion', BlockType.PORTION, 'Amount',
                  portionTypes=['piece', 'small', 'medium', 'large'],
                  units=['piece', 'g', 'oz'], defaultUnit='piece'),
            block('notes', BlockType.NOTES, 'Occasion', maxLength=200,
                  placeholder='Training session, good behavior, special occasion...'),
        ],
    ),
]
