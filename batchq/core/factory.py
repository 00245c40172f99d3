from typing import Any, Dict, Optional
from .interfaces import IMessageFactory
from .models import Message, Validity


class MessageFactory(IMessageFactory):
    def create_message(
        self,
        body: str,
        *,
        metadata: Optional[Dict[str, Any]] = None,
        validator: Optional[Validity] = None,
    ) -> Message:
        return Message(body=body, metadata=metadata or {}, validator=validator)
