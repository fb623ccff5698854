from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


ActionType = Literal["flag_media", "apply_tags", "create_entity", "notify_admin", "set_status", "send_email"]

ACTION_TYPES = ("flag_media", "apply_tags", "create_entity", "notify_admin", "set_status", "send_email")


class FlagMediaParams(BaseModel):
    flag: str = Field(default="flagged", min_length=1)


class ApplyTagsParams(BaseModel):
    tags: list[str] = Field(min_length=1)

    @field_validator("tags", mode="before")
    @classmethod
    def _single_tag_as_list(cls, value):
        if isinstance(value, str):
            return [value]
        return value


class CreateEntityParams(BaseModel):
    type: Literal["tattoo", "artwork"]


class NotifyAdminParams(BaseModel):
    message: str = Field(min_length=1)
    level: Literal["info", "warning", "error"] = "info"


class SetStatusParams(BaseModel):
    status: str = Field(min_length=1)


class SendEmailParams(BaseModel):
    to: str = Field(min_length=3)
    subject: str = Field(min_length=1)
    body: Optional[str] = None
    template: Optional[str] = None


class FlagMediaAction(BaseModel):
    type: Literal["flag_media"] = "flag_media"
    params: FlagMediaParams = Field(default_factory=FlagMediaParams)


class ApplyTagsAction(BaseModel):
    type: Literal["apply_tags"] = "apply_tags"
    params: ApplyTagsParams


class CreateEntityAction(BaseModel):
    type: Literal["create_entity"] = "create_entity"
    params: CreateEntityParams


class NotifyAdminAction(BaseModel):
    type: Literal["notify_admin"] = "notify_admin"
    params: NotifyAdminParams


class SetStatusAction(BaseModel):
    type: Literal["set_status"] = "set_status"
    params: SetStatusParams


class SendEmailAction(BaseModel):
    type: Literal["send_email"] = "send_email"
    params: SendEmailParams


WorkflowAction = Annotated[
    Union[
        FlagMediaAction,
        ApplyTagsAction,
        CreateEntityAction,
        NotifyAdminAction,
        SetStatusAction,
        SendEmailAction,
    ],
    Field(discriminator="type"),
]

_action_adapter = TypeAdapter(WorkflowAction)


def parse_action(action_type, params) -> WorkflowAction:
    """Validate an untyped ``(type, params)`` pair into its typed action model.

    Raises ``pydantic.ValidationError`` (a ``ValueError``) for an unknown type
    or params that do not fit the type.
    """
    return _action_adapter.validate_python({"type": action_type, "params": params or {}})


def get_rule_actions_catalog():
    return {
        "actions": [
            {
                "type": "flag_media",
                "title": "Flag Media",
                "description": "Add a flag to the media record.",
                "jsonSchema": FlagMediaParams.model_json_schema(),
                "examples": [{"type": "flag_media", "params": {"flag": "tattoo_candidate"}}],
                "requiresMedia": True,
            },
            {
                "type": "apply_tags",
                "title": "Apply Tags",
                "description": "Automatically apply taxonomy tags.",
                "jsonSchema": ApplyTagsParams.model_json_schema(),
                "examples": [{"type": "apply_tags", "params": {"tags": ["tattoo", "body-art"]}}],
                "requiresMedia": True,
            },
            {
                "type": "create_entity",
                "title": "Create Entity",
                "description": "Mark the media for tattoo or artwork entity creation.",
                "jsonSchema": CreateEntityParams.model_json_schema(),
                "examples": [{"type": "create_entity", "params": {"type": "tattoo"}}],
                "requiresMedia": True,
            },
            {
                "type": "notify_admin",
                "title": "Notify Admin",
                "description": "Send notification to administrators.",
                "jsonSchema": NotifyAdminParams.model_json_schema(),
                "examples": [{"type": "notify_admin", "params": {"message": "Large upload received"}}],
                "requiresMedia": False,
            },
            {
                "type": "set_status",
                "title": "Set Status",
                "description": "Update the media processing status.",
                "jsonSchema": SetStatusParams.model_json_schema(),
                "examples": [{"type": "set_status", "params": {"status": "review"}}],
                "requiresMedia": True,
            },
            {
                "type": "send_email",
                "title": "Send Email",
                "description": "Queue an email notification.",
                "jsonSchema": SendEmailParams.model_json_schema(),
                "examples": [
                    {
                        "type": "send_email",
                        "params": {"to": "studio@example.com", "subject": "New tattoo upload", "template": "media_review"},
                    }
                ],
                "requiresMedia": False,
            },
        ]
    }
