import logging

from fastapi import Response
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from .enums import ResponseContext
from .errors import ResponseEncodingError
from .schemas import Message, ReturnStatus

logger = logging.getLogger("uvicorn")

JSON_MEDIA_TYPE = "application/json"


def _encode(model: BaseModel) -> bytes:
    try:
        return model.model_dump_json().encode("utf-8")
    except PydanticSerializationError as error:
        # Everything encoded here was built by the relay, so this is a bug.
        logger.critical(f"[Responses] Could not encode {type(model).__name__}: {error}")
        raise ResponseEncodingError(str(error)) from error


def status_response(context: ResponseContext, success: bool) -> Response:
    """
    Status envelope used for every POST outcome and every GET failure.
    """
    status = ReturnStatus(success=success, context=context.value)
    return Response(content=_encode(status), media_type=JSON_MEDIA_TYPE)


def message_response(message: Message) -> Response:
    """
    Bare message JSON, used only for a successful GET.
    """
    return Response(content=_encode(message), media_type=JSON_MEDIA_TYPE)


def empty_response() -> Response:
    return Response(content=b"")
