from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Sequence
from .models import Message, Validity


class IQueueClient(ABC):
    """Narrow view of a batch-oriented queue service."""

    @abstractmethod
    def create_queue(self, name: str, attributes: Dict[str, str]) -> str:
        """Creates the queue if missing and returns its URL."""
        pass

    @abstractmethod
    def get_queue_attributes(self, queue_url: str, names: List[str]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def send_message_batch(
        self, queue_url: str, entries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Returns the raw result, failed entries listed under "Failed"."""
        pass

    @abstractmethod
    def delete_message_batch(
        self, queue_url: str, entries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        pass

    @abstractmethod
    def receive_message(
        self,
        queue_url: str,
        attribute_names: List[str],
        max_count: int,
        visibility_timeout: Optional[int] = None,
        wait_time_seconds: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        pass

    def close(self):
        """Releases connections the client opened itself."""
        pass


class IMessageFactory(ABC):
    @abstractmethod
    def create_message(
        self,
        body: str,
        *,
        metadata: Optional[Dict[str, Any]] = None,
        validator: Optional[Validity] = None,
    ) -> Message:
        pass


class IAdapter(ABC):
    @abstractmethod
    def enqueue(self, messages: Sequence[Message]) -> None:
        pass

    @abstractmethod
    def acknowledge(self, messages: Sequence[Message]) -> None:
        pass

    @abstractmethod
    def dequeue(self, factory: IMessageFactory, limit: int) -> Iterator[Message]:
        """Lazily receives up to `limit` messages."""
        pass
