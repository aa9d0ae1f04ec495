from enum import Enum


class ResponseContext(Enum):
    BAD_ENCODING = "Bad encoding of input json"
    BAD_SECRET = "Bad secret passed to authorise messages"
    STORAGE_FAILED = "Could not store provided message internally"
    NO_MESSAGE = "No message available"
    STORED = "Message successfully stored"


class StoreName(Enum):
    PENDING = "pending"
    APPROVED = "approved"
