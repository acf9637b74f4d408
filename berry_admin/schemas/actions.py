"""Turn a raw ``{"action": ..., ...}`` body into a typed action model."""
from typing import Any, get_args

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from berry_admin.errors import ValidationError

_TAG_ERRORS = {"union_tag_invalid", "union_tag_not_found"}


def action_name(model: type) -> str:
    return get_args(model.model_fields["action"].annotation)[0]


def parse_action(adapter: TypeAdapter, models: tuple[type, ...], body: Any):
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON body")
    try:
        return adapter.validate_python(body)
    except PydanticValidationError as e:
        if any(err["type"] in _TAG_ERRORS for err in e.errors()):
            raise ValidationError("Invalid action")
        by_name = {action_name(m): m for m in models}
        raise ValidationError(by_name[body["action"]].required_message)
