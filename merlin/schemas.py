import math

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _reject_non_finite(value: Any) -> None:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("NaN and infinite numbers are not valid JSON")
    if isinstance(value, dict):
        for item in value.values():
            _reject_non_finite(item)
    elif isinstance(value, list):
        for item in value:
            _reject_non_finite(item)


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    contents: Any = None

    @field_validator("contents")
    @classmethod
    def contents_are_plain_json(cls, value: Any) -> Any:
        _reject_non_finite(value)
        return value


class AuthMessage(BaseModel):
    message: Message = Message()
    secret: str = ""

    # JSON null leaves a field at its zero value
    @field_validator("message", mode="before")
    @classmethod
    def null_message_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("secret", mode="before")
    @classmethod
    def null_secret_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ReturnStatus(BaseModel):
    success: bool
    context: str
