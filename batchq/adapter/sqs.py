"""Batching adapter for Amazon SQS and compatible services.

Every SQS batch operation is capped at ten entries and reports failures per
entry instead of failing the call. The adapter splits work into batches,
attempts all of them, and raises one error carrying exactly the messages the
service rejected.

An adapter instance memoizes the queue URL and visibility timeout on itself
and is meant to be used by one caller at a time.
"""

import logging
import time
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)
from batchq.adapter.pager import ReceivePager
from batchq.core.batching import (
    BATCHSIZE_DELETE,
    BATCHSIZE_SEND,
    chunk,
    number_entries,
    receive_plan,
)
from batchq.core.exceptions import FailedAcknowledgement, FailedEnqueue
from batchq.core.interfaces import IAdapter, IMessageFactory, IQueueClient
from batchq.core.models import Message, QueueOptions, Validity

logger = logging.getLogger(__name__)

BatchCall = Callable[[str, List[Dict[str, Any]]], Dict[str, Any]]
EntryBuilder = Callable[[str, Message], Dict[str, Any]]


def enqueue_entry(local_id: str, message: Message) -> Dict[str, Any]:
    return {
        "Id": local_id,
        "MessageBody": message.body,
        "MessageAttributes": message.metadata.get("MessageAttributes") or {},
    }


def delete_entry(local_id: str, message: Message) -> Dict[str, Any]:
    # Missing receipt handles are left for the service to reject
    return {
        "Id": local_id,
        "ReceiptHandle": message.metadata.get("ReceiptHandle", ""),
    }


class SqsAdapter(IAdapter):
    def __init__(
        self,
        client: IQueueClient,
        name: str,
        options: Union[QueueOptions, Mapping[str, Any], None] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.name = name
        if isinstance(options, QueueOptions):
            self.options = options.model_copy()
        else:
            self.options = QueueOptions.model_validate(dict(options or {}))
        self.clock = clock
        self._url: Optional[str] = None

    def __repr__(self) -> str:
        return f"SqsAdapter(name={self.name!r})"

    def enqueue(self, messages: Sequence[Message]) -> None:
        failed = self._run_batches(
            messages,
            BATCHSIZE_SEND,
            enqueue_entry,
            self.client.send_message_batch,
        )
        if failed:
            logger.warning(
                f"{len(failed)} of {len(messages)} not enqueued on {self.name}"
            )
            raise FailedEnqueue(self, failed)

    def acknowledge(self, messages: Sequence[Message]) -> None:
        failed = self._run_batches(
            messages,
            BATCHSIZE_DELETE,
            delete_entry,
            self.client.delete_message_batch,
        )
        if failed:
            logger.warning(
                f"{len(failed)} of {len(messages)} not acknowledged on {self.name}"
            )
            raise FailedAcknowledgement(self, failed)

    def dequeue(self, factory: IMessageFactory, limit: int) -> ReceivePager:
        return ReceivePager(factory, receive_plan(limit), self._receive_batch)

    def get_queue_url(self) -> str:
        if self._url is None:
            self._url = self.client.create_queue(
                self.name, self.options.to_attributes()
            )
            logger.info(f"Resolved queue {self.name} to {self._url}")
        return self._url

    def get_visibility_timeout(self) -> int:
        if self.options.visibility_timeout is None:
            attributes = self.client.get_queue_attributes(
                self.get_queue_url(), ["VisibilityTimeout"]
            )
            self.options.visibility_timeout = int(attributes["VisibilityTimeout"])
        return self.options.visibility_timeout

    def _run_batches(
        self,
        messages: Sequence[Message],
        size: int,
        build_entry: EntryBuilder,
        call: BatchCall,
    ) -> List[Message]:
        url = self.get_queue_url()
        failed: List[Message] = []

        for batch in chunk(messages, size):
            numbered = number_entries(batch)
            by_id = dict(numbered)
            entries = [build_entry(local_id, msg) for local_id, msg in numbered]
            results = call(url, entries)
            batch_failed = [
                by_id[str(result["Id"])] for result in results.get("Failed", [])
            ]
            logger.debug(
                f"Batch of {len(batch)} on {self.name}: {len(batch_failed)} failed"
            )
            failed.extend(batch_failed)

        return failed

    def _receive_batch(self, size: int) -> Tuple[List[Dict[str, Any]], Validity]:
        validity = Validity(
            deadline=self.clock() + self.get_visibility_timeout(), clock=self.clock
        )
        results = self.client.receive_message(
            self.get_queue_url(),
            ["All"],
            size,
            visibility_timeout=self.options.visibility_timeout,
            wait_time_seconds=self.options.receive_message_wait_time_seconds,
        )
        return results, validity
