"""Built-in report template catalog.

Each entry is seeded into the templates table by
TemplateRegistry.ensure_synced(). Field ids are the answer keys.
"""

_STUDENT_COUNT_FIELDS = [
    {
        "id": "total_students",
        "label": "Chora-tadbirga jalb qilingan talabalar soni (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Enter total number of students",
        "validation": {"min": 0},
    },
    {
        "id": "first_year",
        "label": "Shundan birinchi bosqich (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Number of first year students",
        "validation": {"min": 0},
    },
    {
        "id": "second_year",
        "label": "Shundan ikkinchi bosqich (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Number of second year students",
        "validation": {"min": 0},
    },
    {
        "id": "third_year",
        "label": "Shundan uchinchi bosqich (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Number of third year students",
        "validation": {"min": 0},
    },
    {
        "id": "fourth_year",
        "label": "Shundan to'rtinchi bosqich (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Number of fourth year students",
        "validation": {"min": 0},
    },
    {
        "id": "masters",
        "label": "Shundan magistrantlar (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Number of master's students",
        "validation": {"min": 0},
    },
    {
        "id": "male_students",
        "label": "Shundan o'g'il bolalar (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Number of male students",
        "validation": {"min": 0},
    },
    {
        "id": "female_students",
        "label": "Shundan qiz bolalar (faqat son kiritiladi)",
        "type": "number",
        "required": True,
        "placeholder": "Number of female students",
        "validation": {"min": 0},
    },
]

_EVENT_FIELDS = [
    {
        "id": "event_name",
        "label": "Chora tadbir nomi*",
        "type": "text",
        "required": True,
        "placeholder": "Enter event name",
    },
    {
        "id": "start_date",
        "label": "Chora tadbir sanasi (boshlangan)*",
        "type": "date",
        "required": True,
    },
    {
        "id": "end_date",
        "label": "Chora tadbir sanasi (tugallangan)*",
        "type": "date",
        "required": True,
    },
]

REPORT_TEMPLATES = [
    {
        "id": "student_activity_template",
        "key": "student_activity",
        "name": "Student Activity Report",
        "description": (
            "Chora-tadbirga talabalar jalb qilinmagan bo'lsa talabalar soniga "
            "doir bandlar to'ldirilmaydi."
        ),
        "fields": _EVENT_FIELDS + _STUDENT_COUNT_FIELDS,
    },
    {
        "id": "youth_work_department_template",
        "key": "youth_work",
        "name": "Yoshlar bilan ishlash bo'limi",
        "description": (
            "Talabalar bilan ishlashni taqozo etmagan chora-tadbirlarga "
            "talabalar soni kiritilmaydi."
        ),
        "fields": _EVENT_FIELDS + _STUDENT_COUNT_FIELDS,
    },
    {
        "id": "general_report_template",
        "key": "general",
        "name": "General Report",
        "description": "Basic report template with title and description",
        "fields": [
            {
                "id": "title",
                "label": "Report Title*",
                "type": "text",
                "required": True,
                "placeholder": "Enter report title",
            },
            {
                "id": "description",
                "label": "Description*",
                "type": "textarea",
                "required": True,
                "placeholder": "Describe the report details",
            },
            {
                "id": "date",
                "label": "Report Date*",
                "type": "date",
                "required": True,
            },
            {
                "id": "priority",
                "label": "Priority",
                "type": "select",
                "required": False,
                "options": ["low", "medium", "high"],
            },
        ],
    },
]
