import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Tuple
from batchq.core.interfaces import IMessageFactory
from batchq.core.models import Message, Validity

logger = logging.getLogger(__name__)

ReceiveBatch = Callable[[int], Tuple[List[Dict[str, Any]], Validity]]


def message_metadata(result: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "Attributes": result.get("Attributes", {}),
        "MessageAttributes": result.get("MessageAttributes", {}),
        "MessageId": result["MessageId"],
        "ReceiptHandle": result["ReceiptHandle"],
    }


class ReceivePager:
    """Single-use iterator over a planned series of receive calls.

    A remote call is issued only once the messages of the previous one have
    all been handed out, so a consumer that stops early never pays for the
    remaining batches.
    """

    def __init__(
        self,
        factory: IMessageFactory,
        batch_sizes: List[int],
        receive_batch: ReceiveBatch,
    ):
        self.factory = factory
        self.batch_sizes = batch_sizes
        self.batch_index = 0
        self._receive_batch = receive_batch
        self._buffer: Deque[Message] = deque()

    def __iter__(self) -> "ReceivePager":
        return self

    def __next__(self) -> Message:
        while not self._buffer:
            if self.batch_index >= len(self.batch_sizes):
                raise StopIteration
            self._fetch(self.batch_sizes[self.batch_index])
            self.batch_index += 1
        return self._buffer.popleft()

    @property
    def exhausted(self) -> bool:
        return not self._buffer and self.batch_index >= len(self.batch_sizes)

    def _fetch(self, size: int):
        results, validity = self._receive_batch(size)
        logger.debug(
            f"Receive batch {self.batch_index + 1}/{len(self.batch_sizes)} "
            f"asked for {size}, got {len(results)}"
        )
        for result in results:
            self._buffer.append(
                self.factory.create_message(
                    result["Body"],
                    metadata=message_metadata(result),
                    validator=validity,
                )
            )
