import hmac
import logging

from fastapi import Response
from pydantic import ValidationError

from .enums import ResponseContext
from .errors import (
    AuthorisationError,
    MessageDecodingError,
    MessageNotFoundError,
    MessageStorageError,
)
from .responses import empty_response, message_response, status_response
from .schemas import AuthMessage
from .storage import MessageStore

logger = logging.getLogger("uvicorn")


class ModerationHandler:
    """
    Request logic for one relay endpoint.

    POSTed messages land in the receive store, GET reads from the send store.
    Pairing two handlers with their stores crossed gives the moderation flow:
    public submissions wait in the pending pool until an admin re-submits them,
    with the secret, into the approved pool that the public reads from.
    """

    def __init__(
        self,
        receive_store: MessageStore,
        send_store: MessageStore,
        auth_required: bool,
        secret: str,
        name: str = "public",
    ):
        """
        Args:
            receive_store (MessageStore): Where POSTed messages are stored.
            send_store (MessageStore): Where GET picks messages from.
            auth_required (bool): Whether POST must carry the admin secret.
            secret (str): The admin secret.
            name (str): Label used in log lines.
        """
        self.receive_store = receive_store
        self.send_store = send_store
        self.auth_required = auth_required
        self.name = name

        self._secret = secret.encode("utf-8", "surrogatepass")

    def handle(self, method: str, body: bytes) -> Response:
        """
        Dispatches a request by HTTP method. Unhandled methods get an empty body.
        """
        logger.info(f"[Moderation] Processing {method} on '{self.name}' endpoint")

        method = method.upper()
        if method == "GET":
            return self.handle_get()
        if method == "POST":
            return self.handle_post(body)

        logger.info(f"[Moderation] No handler for {method} on '{self.name}' endpoint")
        return empty_response()

    def handle_get(self) -> Response:
        try:
            message = self.send_store.get_message()
        except MessageNotFoundError:
            return status_response(ResponseContext.NO_MESSAGE, success=False)

        return message_response(message)

    def handle_post(self, body: bytes) -> Response:
        try:
            envelope = self.decode(body)
        except MessageDecodingError as error:
            logger.warning(f"[Moderation] Rejected undecodable body on '{self.name}': {error}")
            return status_response(ResponseContext.BAD_ENCODING, success=False)

        if self.auth_required:
            try:
                self.check_secret(envelope.secret)
            except AuthorisationError:
                logger.warning(f"[Moderation] Rejected bad secret on '{self.name}'")
                return status_response(ResponseContext.BAD_SECRET, success=False)

        try:
            self.receive_store.store_message(envelope.message)
        except MessageStorageError as error:
            logger.error(f"[Moderation] Could not store message from '{self.name}': {error}")
            return status_response(ResponseContext.STORAGE_FAILED, success=False)

        return status_response(ResponseContext.STORED, success=True)

    @staticmethod
    def decode(body: bytes) -> AuthMessage:
        """
        Parses a submission envelope.

        Raises:
            MessageDecodingError: If the body is not valid JSON of the expected shape.
        """
        try:
            return AuthMessage.model_validate_json(body)
        except ValidationError as error:
            raise MessageDecodingError(f"{error.error_count()} validation error(s)") from error

    def check_secret(self, provided: str) -> None:
        """
        Raises:
            AuthorisationError: If the provided secret differs from the admin secret.
        """
        if not hmac.compare_digest(provided.encode("utf-8", "surrogatepass"), self._secret):
            raise AuthorisationError("secret mismatch")


def authorised_handler(receive_store: MessageStore, send_store: MessageStore, secret: str) -> ModerationHandler:
    return ModerationHandler(receive_store, send_store, auth_required=True, secret=secret, name="admin")


def non_authorised_handler(receive_store: MessageStore, send_store: MessageStore, secret: str) -> ModerationHandler:
    return ModerationHandler(receive_store, send_store, auth_required=False, secret=secret, name="public")
