"""Form payload validation.

Forms post nested field names such as ``thread[title]`` or
``reply[replyContent]``. Each payload model below describes one of those
groups; ``validate_form`` pulls the group out of the submitted form and
either returns the parsed model or raises a single ``ValidationError`` that
lists every violation.
"""

import logging
from typing import Any, Dict, List, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from coding_gurus.core.errors import ValidationError

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class ThreadPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)


class ReplyPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    reply_content: str = Field(alias="replyContent", min_length=1)


def _field_names(model: Type[BaseModel]) -> List[str]:
    return [field.alias or name for name, field in model.model_fields.items()]


def _describe(prefix: str, error: Dict[str, Any]) -> str:
    path = ".".join([prefix, *(str(part) for part in error["loc"])])
    kind = error["type"]
    if kind == "missing":
        return f'"{path}" is required'
    if kind == "string_too_short":
        return f'"{path}" is not allowed to be empty'
    if kind == "string_too_long":
        return f'"{path}" length must be less than or equal to {error["ctx"]["max_length"]} characters long'
    if kind == "string_type":
        return f'"{path}" must be a string'
    return f'"{path}" {error["msg"]}'


def validate_form(model: Type[PayloadT], prefix: str, form: Any) -> PayloadT:
    """Validate the ``prefix[...]`` fields of ``form`` against ``model``.

    Missing fields are left out of the payload so they are reported as
    required rather than empty.
    """
    data = {}
    for name in _field_names(model):
        key = f"{prefix}[{name}]"
        if key in form:
            data[name] = form.get(key)
    if not data:
        raise ValidationError(f'"{prefix}" is required')
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        message = ", ".join(_describe(prefix, err) for err in exc.errors())
        logger.info("Rejected %s payload: %s", prefix, message)
        raise ValidationError(message) from None


async def thread_form(request: Request) -> ThreadPayload:
    """Dependency: parsed ``thread[...]`` fields of the request form."""
    form = await request.form()
    return validate_form(ThreadPayload, "thread", form)


async def reply_form(request: Request) -> ReplyPayload:
    """Dependency: parsed ``reply[...]`` fields of the request form."""
    form = await request.form()
    return validate_form(ReplyPayload, "reply", form)
