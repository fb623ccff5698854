from typing import Literal


Trigger = Literal["on_upload", "on_classification", "on_publish", "on_status_change"]
Operator = Literal["equals", "not_equals", "contains", "greater_than", "less_than"]

TRIGGERS = ("on_upload", "on_classification", "on_publish", "on_status_change")
OPERATORS = ("equals", "not_equals", "contains", "greater_than", "less_than")

TRIGGER_LABELS = {
    "on_upload": "On Media Upload",
    "on_classification": "On AI Classification",
    "on_publish": "On Entity Publish",
    "on_status_change": "On Status Change",
}

# Condition fields a rule may reference, per trigger.
TRIGGER_FIELDS = {
    "on_upload": [
        {
            "field": "mime_type",
            "label": "File Type",
            "type": "select",
            "options": ["image/jpeg", "image/png", "image/gif", "image/webp"],
        },
        {"field": "size", "label": "File Size (MB)", "type": "number"},
        {"field": "filename", "label": "Filename Contains", "type": "text"},
    ],
    "on_classification": [
        {"field": "detected_type", "label": "Detected Type", "type": "select", "options": ["tattoo", "artwork", "unknown"]},
        {"field": "min_confidence", "label": "Min Confidence", "type": "number", "min": 0, "max": 1, "step": 0.1},
        {"field": "has_tags", "label": "Has Tags", "type": "text"},
    ],
    "on_publish": [
        {"field": "entity_type", "label": "Entity Type", "type": "select", "options": ["tattoo", "artwork"]},
        {"field": "category", "label": "Category", "type": "text"},
        {"field": "artist_id", "label": "Artist ID", "type": "number"},
    ],
    "on_status_change": [
        {"field": "old_status", "label": "Old Status", "type": "text"},
        {"field": "new_status", "label": "New Status", "type": "text"},
    ],
}


def fields_for_trigger(trigger: str) -> set[str]:
    return {f["field"] for f in TRIGGER_FIELDS.get(trigger, [])}


def get_rule_conditions_catalog():
    return {
        "combinator": "all",
        "triggers": [{"value": t, "label": TRIGGER_LABELS[t]} for t in TRIGGERS],
        "fields": TRIGGER_FIELDS,
        "operators": [
            {"value": "equals", "label": "Equals", "types": ["text", "number", "select"]},
            {"value": "not_equals", "label": "Does not equal", "types": ["text", "number", "select"]},
            {"value": "contains", "label": "Contains", "types": ["text"]},
            {"value": "greater_than", "label": "Greater than", "types": ["number"]},
            {"value": "less_than", "label": "Less than", "types": ["number"]},
        ],
        "examples": [
            {"c1": {"field": "mime_type", "operator": "equals", "value": "image/png"}},
            {"c1": {"field": "size", "operator": "greater_than", "value": 5}},
        ],
    }
