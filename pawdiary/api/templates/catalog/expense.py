# pawdiary/api/templates/catalog/expense.py
from pawdiary.models.activity import ActivityTemplate, ActivityCategory, BlockType
from pawdiary.api.templates.blocks import block

EXPENSE_TEMPLATES = [
    ActivityTemplate(
        id='expense.purchase',
        category=ActivityCategory.EXPENSE,
        subcategory='Purchase',
        label='Purchase',
        icon='🛒',
        is_quick_log_enabled=True,
        description='Record pet supply purchases and services',
        blocks=[
            block('title', BlockType.TITLE, 'Item/Service', required=True, maxLength=100),
            block('time', BlockType.TIME, 'Purchase Date', required=True),
            block('cost', BlockType.COST, 'Cost', required=True,
                  categories=['food', 'treats', 'toys', 'supplies', 'accessories', 'other']),
            block('location', BlockType.LOCATION, 'Store/Clinic', useGPS=False),
            block('notes', BlockType.NOTES, 'Purchase Notes', maxLength=300),
            block('attachment', BlockType.ATTACHMENT, 'Receipt/Photos', maxFiles=3, showOCR=True),
        ],
    ),
    ActivityTemplate(
        id='expense.veterinary',
        category=ActivityCategory.EXPENSE,
        subcategory='Veterinary',
        label='Veterinary Expense',
        icon='🏥',
        description='Track veterinary visits and medical expenses',
        blocks=[
            block('time', BlockType.TIME, 'Visit Date', required=True),
            block('title', BlockType.TITLE, 'Service Type', required=True, maxLength=100,
                  autocomplete=['Annual checkup', 'Vaccination', 'Dental cleaning', 'Emergency visit', 'Surgery']),
            block('people', BlockType.PEOPLE, 'Veterinarian/Clinic', required=True),
            block('cost', BlockType.COST, 'Total Cost', required=True,
                  categories=['examination', 'vaccination', 'surgery', 'medication', 'diagnostics', 'emergency']),
            block('checklist', BlockType.CHECKLIST, 'Services Provided', checklistType='veterinary',
                  predefinedItems=['Physical examination', 'Vaccinations', 'Blood work', 'X-rays', 'Dental care']),
            block('reminder', BlockType.REMINDER, 'Follow-up Reminders'),
            block('notes', BlockType.NOTES, 'Visit Summary'),
            block('attachment', BlockType.ATTACHMENT, 'Medical Records & Receipts', showOCR=True),
        ],
    ),
    ActivityTemplate(
        id='expense.grooming',
        category=ActivityCategory.EXPENSE,
        subcategory='Grooming',
        label='Grooming Service',
        icon='✂️',
        is_quick_log_enabled=True,
        description='Log grooming appointments and costs',
        blocks=[
            block('time', BlockType.TIME, 'Appointment Date', required=True),
            block('people', BlockType.PEOPLE, 'Groomer/Salon', required=True),
            block('checklist', BlockType.CHECKLIST, 'Services Received', required=True,
                  checklistType='grooming',
                  predefinedItems=['Bath', 'Haircut', 'Nail trim', 'Ear cleaning', 'Teeth brushing']),
            block('cost', BlockType.COST, 'Grooming Cost', required=True,
                  categories=['full_groom', 'bath_only', 'nail_trim', 'specialty_service']),
            block('rating', BlockType.RATING, 'Service Quality', ratingType='quality',
                  labels=['Poor', 'Fair', 'Good', 'Very Good', 'Excellent']),
            block('reminder', BlockType.REMINDER, 'Next Grooming'),
            block('notes', BlockType.NOTES, 'Grooming Notes', maxLength=300),
            block('attachment', BlockType.ATTACHMENT, 'Before/After Photos', maxFiles=4),
        ],
    ),
    ActivityTemplate(
        id='expense.insurance',
        category=ActivityCategory.EXPENSE,
        subcategory='Insurance',
        label='Pet Insurance',
        icon='🛡️',
        is_quick_log_enabled=True,
        description='Track insurance premiums, claims, and reimbursements',
        blocks=[
            block('time', BlockType.TIME, 'Payment/Claim Date', required=True),
            block('title', BlockType.TITLE, 'Transaction Type', required=True, maxLength=100,
                  autocomplete=['Monthly premium', 'Claim submitted', 'Reimbursement received', 'Deductible payment']),
            block('cost', BlockType.COST, 'Amount', required=True,
                  categories=['premium', 'reimbursement', 'deductible', 'fee']),
            block('notes', BlockType.NOTES, 'Insurance Details', maxLength=300),
            block('attachment', BlockType.ATTACHMENT, 'Insurance Documents', showOCR=True),
        ],
    ),
]
