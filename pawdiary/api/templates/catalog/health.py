# pawdiary/api/templates/catalog/health.py
from pawdiary.models.activity import ActivityTemplate, ActivityCategory, BlockType
from pawdiary.api.templates.blocks import block

HEALTH_TEMPLATES = [
    ActivityTemplate(
        id='health.checkup',
        category=ActivityCategory.HEALTH,
        subcategory='Checkup',
        label='Health Checkup',
        icon='🩺',
        description='Routine veterinary checkups and examinations',
        blocks=[
            block('time', BlockType.TIME, 'Checkup Date', required=True),
            block('people', BlockType.PEOPLE, 'Veterinarian', personTypes=['veterinarian', 'vet_tech']),
            block('checklist', BlockType.CHECKLIST, 'Health Checklist', checklistType='health',
                  predefinedItems=['Weight checked', 'Temperature normal', 'Heart and lungs clear',
                                   'Teeth and gums healthy', 'Eyes and ears clean', 'Vaccinations up to date']),
            block('cost', BlockType.COST, 'Visit Cost',
                  categories=['checkup', 'vaccination', 'treatment', 'medication', 'emergency']),
            block('reminder', BlockType.REMINDER, 'Follow-up Reminder', reminderType='follow_up'),
            block('notes', BlockType.NOTES, 'Checkup Notes'),
            block('attachment', BlockType.ATTACHMENT, 'Medical Records', showOCR=True),
        ],
    ),
    ActivityTemplate(
        id='health.medication',
        category=ActivityCategory.HEALTH,
        subcategory='Medication',
        label='Medication Administration',
        icon='💊',
        is_quick_log_enabled=True,
        description='Track medication doses and schedules',
        blocks=[
            block('time', BlockType.TIME, 'Administration Time', required=True),
            block('title', BlockType.TITLE, 'Medication Name', required=True, maxLength=100),
            block('portion', BlockType.PORTION, 'Dosage', required=True,
                  portionTypes=['tablet', 'liquid', 'injection', 'topical'],
                  units=['tablet', 'capsule', 'ml', 'mg'], defaultUnit='tablet', showBrand=False),
            block('notes', BlockType.NOTES, 'Administration Notes', maxLength=300),
            block('reminder', BlockType.REMINDER, 'Next Dose Reminder', reminderType='medication'),
        ],
    ),
    ActivityTemplate(
        id='health.symptom',
        category=ActivityCategory.HEALTH,
        subcategory='Symptom',
        label='Symptom Tracking',
        icon='🤒',
        is_quick_log_enabled=True,
        description='Record symptoms, their severity, and related observations',
        blocks=[
            block('time', BlockType.TIME, 'Symptom Observed', required=True),
            block('title', BlockType.TITLE, 'Primary Symptom', required=True, maxLength=100,
                  autocomplete=['Vomiting', 'Diarrhea', 'Lethargy', 'Loss of appetite', 'Coughing', 'Limping']),
            block('rating', BlockType.RATING, 'Severity', required=True, ratingType='severity',
                  showEmojis=False, labels=['Mild', 'Moderate', 'Concerning', 'Severe', 'Critical']),
            block('checklist', BlockType.CHECKLIST, 'Additional Symptoms', checklistType='symptoms',
                  predefinedItems=['Fever', 'Excessive thirst', 'Scratching', 'Sneezing', 'Hiding']),
            block('notes', BlockType.NOTES, 'Detailed Description'),
            block('attachment', BlockType.ATTACHMENT, 'Photos/Videos'),
        ],
    ),
]
