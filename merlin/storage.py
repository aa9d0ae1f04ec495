import logging
import random
import threading

from abc import ABC, abstractmethod
from typing import Optional

from .errors import MessageNotFoundError
from .schemas import Message

logger = logging.getLogger("uvicorn")


class MessageStore(ABC):
    """
    A collection of messages supporting append and uniformly random reads.
    """

    @abstractmethod
    def store_message(self, message: Message) -> None:
        """
        Appends a message to the collection.

        Raises:
            MessageStorageError: If the message could not be kept.
        """

    @abstractmethod
    def get_message(self) -> Message:
        """
        Returns one stored message chosen uniformly at random.
        The collection is left unchanged.

        Raises:
            MessageNotFoundError: If the collection is empty.
        """

    @abstractmethod
    def count(self) -> int:
        """
        Returns the number of stored messages.
        """


class MemoryMessageStore(MessageStore):
    """
    Thread-safe in-memory message store.
    """

    def __init__(self, name: str = "memory", rng: Optional[random.Random] = None):
        """
        Args:
            name (str): Label used in log lines (e.g. "pending", "approved").
            rng (Optional[random.Random]): Index generator. Defaults to an OS-entropy source.
        """
        self.name = name
        self._messages: list[Message] = []

        self._lock = threading.Lock()
        self._rng = rng or random.SystemRandom()

    def store_message(self, message: Message) -> None:
        with self._lock:
            self._messages.append(message)
            size = len(self._messages)

        logger.info(f"[Storage] Stored message in '{self.name}' ({size} total)")

    def get_message(self) -> Message:
        with self._lock:
            size = len(self._messages)
            if size == 0:
                raise MessageNotFoundError()

            index = self._rng.randrange(size)
            message = self._messages[index]

        logger.info(f"[Storage] Picked message {index} of {size} from '{self.name}'")
        return message

    def count(self) -> int:
        with self._lock:
            return len(self._messages)
