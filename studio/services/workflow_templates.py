import copy
import logging

from sqlalchemy.orm import Session

from studio.models.workflow_rule import WorkflowRule


logger = logging.getLogger(__name__)


RULE_TEMPLATES = [
    {
        "name": "Auto-suggest Tattoo Creation",
        "description": "Automatically suggest creating a tattoo entity for high-confidence tattoo detections",
        "trigger": "on_classification",
        "conditions": {
            "detected_type": {"field": "detected_type", "operator": "equals", "value": "tattoo"},
            "min_confidence": {"field": "min_confidence", "operator": "greater_than", "value": 0.7},
        },
        "actions": [
            {"type": "flag_media", "params": {"flag": "tattoo_candidate"}},
            {"type": "create_entity", "params": {"type": "tattoo"}},
        ],
        "priority": 1,
    },
    {
        "name": "Auto-suggest Artwork Creation",
        "description": "Automatically suggest creating an artwork entity for high-confidence artwork detections",
        "trigger": "on_classification",
        "conditions": {
            "detected_type": {"field": "detected_type", "operator": "equals", "value": "artwork"},
            "min_confidence": {"field": "min_confidence", "operator": "greater_than", "value": 0.7},
        },
        "actions": [
            {"type": "flag_media", "params": {"flag": "artwork_candidate"}},
            {"type": "create_entity", "params": {"type": "artwork"}},
        ],
        "priority": 2,
    },
    {
        "name": "Apply Tattoo Tags",
        "description": "Automatically apply tattoo-related tags for tattoo detections",
        "trigger": "on_classification",
        "conditions": {
            "detected_type": {"field": "detected_type", "operator": "equals", "value": "tattoo"},
            "min_confidence": {"field": "min_confidence", "operator": "greater_than", "value": 0.5},
        },
        "actions": [{"type": "apply_tags", "params": {"tags": ["tattoo", "body-art"]}}],
        "priority": 3,
    },
    {
        "name": "Apply Artwork Tags",
        "description": "Automatically apply artwork-related tags for artwork detections",
        "trigger": "on_classification",
        "conditions": {
            "detected_type": {"field": "detected_type", "operator": "equals", "value": "artwork"},
            "min_confidence": {"field": "min_confidence", "operator": "greater_than", "value": 0.5},
        },
        "actions": [{"type": "apply_tags", "params": {"tags": ["artwork", "visual-art"]}}],
        "priority": 4,
    },
]


def seed_rule_templates(db: Session):
    """Insert the built-in templates whose name is not taken yet. Returns (created, skipped names)."""
    existing = {row[0] for row in db.query(WorkflowRule.name).all()}

    created = []
    skipped = []
    for template in RULE_TEMPLATES:
        if template["name"] in existing:
            skipped.append(template["name"])
            continue
        rule = WorkflowRule(is_enabled=1, **copy.deepcopy(template))
        db.add(rule)
        created.append(rule)

    db.commit()
    for rule in created:
        db.refresh(rule)

    logger.info("seeded workflow rule templates", extra={"created_count": len(created), "skipped_count": len(skipped)})
    return created, skipped
