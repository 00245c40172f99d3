from typing import Any, List
from .models import Message


class AdapterException(Exception):
    """Raised when the service rejects some of the messages of a call."""

    def __init__(self, adapter: Any, messages: List[Message], reason: str):
        super().__init__(f"{reason}: {len(messages)} message(s) via {adapter!r}")
        self.adapter = adapter
        self.messages = messages


class FailedEnqueue(AdapterException):
    def __init__(self, adapter: Any, messages: List[Message]):
        super().__init__(adapter, messages, "Failed to enqueue")


class FailedAcknowledgement(AdapterException):
    def __init__(self, adapter: Any, messages: List[Message]):
        super().__init__(adapter, messages, "Failed to acknowledge")
