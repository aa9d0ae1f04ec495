class MerlinError(Exception):
    """
    Base class for every error raised by the relay.
    """


class MessageDecodingError(MerlinError):
    """
    The request body is not a valid submission envelope.
    """


class AuthorisationError(MerlinError):
    """
    The secret passed with a submission does not match the admin secret.
    """


class MessageStorageError(MerlinError):
    """
    A store could not keep the provided message.
    """


class MessageNotFoundError(MerlinError):
    """
    A store was asked for a message while empty.
    """

    def __init__(self, message: str = "no message available"):
        super().__init__(message)


class ResponseEncodingError(MerlinError):
    """
    A response built by the relay itself could not be serialised.
    """
