# Field descriptors for each questionnaire step, in display order.

BUSINESS_TYPES = [
    {"value": "street", "label": "🏪 Street vending"},
    {"value": "shop", "label": "🏬 Retail shop"},
    {"value": "online", "label": "💻 Online store"},
    {"value": "service", "label": "👨‍💼 Services"},
]

STEPS = {
    "step1": {
        "title": "What are you selling?",
        "fields": [
            {"name": "productName", "label": "Product description", "type": "textarea",
             "placeholder": "Coffee from a street kiosk"},
            {"name": "businessType", "label": "Business type", "type": "select",
             "options": BUSINESS_TYPES},
        ],
    },
    "step2": {
        "title": "Customers and demand",
        "fields": [
            {"name": "targetCustomer", "label": "Customer profile", "type": "textarea",
             "placeholder": "Working people aged 18-35"},
            {"name": "problemSolved", "label": "What problem do you solve?", "type": "textarea",
             "placeholder": "No time in the morning, need a quick coffee"},
        ],
    },
    "step3": {
        "title": "Unit economics",
        "fields": [
            {"name": "pricePoint", "label": "Price (EUR)", "type": "number", "placeholder": "5"},
            {"name": "costPrice", "label": "Cost per unit (EUR)", "type": "number", "placeholder": "1.5"},
        ],
    },
    "step4": {
        "title": "Traffic and conversion",
        "fields": [
            {"name": "dailyTraffic", "label": "Potential customers per day", "type": "number",
             "placeholder": "1500"},
            {"name": "conversionRate", "label": "Conversion (%)", "type": "number", "placeholder": "2"},
        ],
    },
    "step5": {
        "title": "Expenses and investment",
        "fields": [
            {"name": "monthlyExpenses", "label": "Monthly expenses (EUR)", "type": "number",
             "placeholder": "500"},
            {"name": "initialInvestment", "label": "Starting capital (EUR)", "type": "number",
             "placeholder": "1000"},
        ],
    },
}

NUMERIC_FIELDS = [f["name"] for step in STEPS.values() for f in step["fields"] if f["type"] == "number"]
TEXT_FIELDS = [f["name"] for step in STEPS.values() for f in step["fields"] if f["type"] != "number"]


def field_names(step_key):
    return [f["name"] for f in STEPS[step_key]["fields"]]


def field_label(name):
    for step in STEPS.values():
        for f in step["fields"]:
            if f["name"] == name:
                return f["label"]
    return name


# Answers ride in the signed session cookie, which browsers cap at about 4 KB
MAX_TEXT_LENGTH = 250
MAX_NUMBER_LENGTH = 32


def clean_answer(name, value):
    """Trim a submitted value to the length its field allows."""
    value = (value or "").strip()
    limit = MAX_NUMBER_LENGTH if name in NUMERIC_FIELDS else MAX_TEXT_LENGTH
    return value[:limit]
