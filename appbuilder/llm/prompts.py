# appbuilder/llm/prompts.py
"""
Extraction prompt and structured-output schema for the live generator.
"""
from appbuilder.utils.app_spec import FIELD_TYPES


EXTRACTION_PROMPT = """Extract structured app requirements from the user description and return JSON only.

User Description: "{description}"

Output schema (strict):
{{
  "appName": string,
  "entities": [{{ "name": string, "fields": [{{ "name": string, "type": "text|email|number|date|select|textarea", "required": boolean }}] }}],
  "roles": [string],
  "features": [string],
  "rolePermissions": [
    {{ "role": string, "canCreate": [string], "canView": [string], "canEdit": [string] }}
  ]
}}

Rules:
- Use only the allowed field types.
- Always use roles[] as grouping labels (either actual roles or feature groups). Output exactly one rolePermissions item per role with the same role name.
- Each role must have non-empty canView (include relevant entities).
- Designate at least one admin-like role with full control over ALL entities (canCreate & canEdit). Prefer names like: Admin, Administrator, Owner, Manager, Supervisor. If none fit, choose the most responsible role based on the description.
- Ensure at least one role has non-empty canEdit; avoid returning all-empty canEdit.
- Keep arrays concise and relevant; omit commentary.

Mini example (format only):
Input: "Inventory app: managers add products, employees record sales, admin sees reports"
Output: {{
  "appName": "Inventory Manager",
  "entities": [ {{ "name": "Product", "fields": [ {{ "name": "Name", "type": "text", "required": true }} ] }} ],
  "roles": ["Manager","Employee","Admin"],
  "features": ["Add products","Record sales","Reports"],
  "rolePermissions": [
    {{ "role": "Manager", "canCreate": ["Product"], "canView": ["Product","Sale"], "canEdit": ["Product"] }},
    {{ "role": "Employee", "canCreate": ["Sale"], "canView": ["Product","Sale"], "canEdit": ["Sale"] }},
    {{ "role": "Admin", "canCreate": ["Product","Sale"], "canView": ["Product","Sale"], "canEdit": ["Product","Sale"] }}
  ]
}}

Feature-as-role example (format only):
Input: "Personal finance: record expenses and income, categorize transactions, budgets, monthly/yearly reports"
Output: {{
  "appName": "Personal Finance",
  "entities": [ {{ "name": "Expense", "fields": [ {{ "name": "Amount", "type": "number", "required": true }} ] }} ],
  "roles": ["Budgeting","Transactions","Reports"],
  "features": ["Budgeting","Transactions","Reports"],
  "rolePermissions": [
    {{ "role": "Budgeting", "canCreate": ["Budget","Category"], "canView": ["Budget","Category"], "canEdit": ["Budget","Category"] }},
    {{ "role": "Transactions", "canCreate": ["Expense","Income"], "canView": ["Expense","Income"], "canEdit": ["Expense","Income"] }},
    {{ "role": "Reports", "canCreate": [], "canView": ["Expense","Income","Budget"], "canEdit": [] }}
  ]
}}

Return JSON only."""


_STRING_ARRAY = {"type": "array", "items": {"type": "string"}}

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "appName": {"type": "string", "description": "The name of the application"},
        "entities": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "fields": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "type": {"type": "string", "enum": list(FIELD_TYPES)},
                                "required": {"type": "boolean"},
                            },
                            "required": ["name", "type", "required"],
                        },
                    },
                },
                "required": ["name", "fields"],
            },
        },
        "roles": _STRING_ARRAY,
        "features": _STRING_ARRAY,
        "rolePermissions": {
            "type": "array",
            "description": "One record per role with its canCreate/canView/canEdit entity lists.",
            "items": {
                "type": "object",
                "properties": {
                    "role": {"type": "string", "description": "Role name matching one of the roles[]"},
                    "canCreate": _STRING_ARRAY,
                    "canView": _STRING_ARRAY,
                    "canEdit": _STRING_ARRAY,
                },
                "required": ["role", "canCreate", "canView", "canEdit"],
            },
        },
    },
    "required": ["appName", "entities", "roles", "features", "rolePermissions"],
}


def build_extraction_prompt(description: str) -> str:
    # Quotes would close the description literal early
    return EXTRACTION_PROMPT.format(description=description.replace('"', "'"))
