from typing import Any, Dict, List, Optional
import pytest
from batchq.core.interfaces import IQueueClient
from batchq.core.models import Message

QUEUE_URL = "https://sqs.eu-west-1.amazonaws.com/123456789012/foo"


class FakeQueueClient(IQueueClient):
    """Records every call; batch failures and receive results are scripted."""

    def __init__(self, visibility_timeout: int = 120):
        self.calls: List[tuple] = []
        self.visibility_timeout = visibility_timeout
        # one list of failed ids per batch call, in call order
        self.send_failures: List[List[str]] = []
        self.delete_failures: List[List[str]] = []
        self.receive_results: List[List[Dict[str, Any]]] = []
        self.closed = False

    def close(self):
        self.closed = True

    def calls_to(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def create_queue(self, name: str, attributes: Dict[str, str]) -> str:
        self.calls.append(("create_queue", name, attributes))
        return QUEUE_URL

    def get_queue_attributes(self, queue_url: str, names: List[str]) -> Dict[str, Any]:
        self.calls.append(("get_queue_attributes", queue_url, names))
        return {"VisibilityTimeout": str(self.visibility_timeout)}

    def send_message_batch(self, queue_url, entries):
        self.calls.append(("send_message_batch", queue_url, entries))
        return self._batch_result(entries, self.send_failures)

    def delete_message_batch(self, queue_url, entries):
        self.calls.append(("delete_message_batch", queue_url, entries))
        return self._batch_result(entries, self.delete_failures)

    def receive_message(
        self,
        queue_url: str,
        attribute_names: List[str],
        max_count: int,
        visibility_timeout: Optional[int] = None,
        wait_time_seconds: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        self.calls.append(
            (
                "receive_message",
                queue_url,
                attribute_names,
                max_count,
                visibility_timeout,
                wait_time_seconds,
            )
        )
        if self.receive_results:
            return self.receive_results.pop(0)
        return [sqs_message(i) for i in range(max_count)]

    def _batch_result(self, entries, failures):
        failed_ids = failures.pop(0) if failures else []
        return {
            "Successful": [
                {"Id": entry["Id"]} for entry in entries if entry["Id"] not in failed_ids
            ],
            "Failed": [
                {"Id": failed_id, "SenderFault": True, "Code": "InvalidParameterValue"}
                for failed_id in failed_ids
            ],
        }


def sqs_message(n: int) -> Dict[str, Any]:
    return {
        "Body": f"body-{n}",
        "Attributes": {"ApproximateReceiveCount": "1"},
        "MessageAttributes": {},
        "MessageId": f"id-{n}",
        "ReceiptHandle": f"rh-{n}",
    }


@pytest.fixture
def client() -> FakeQueueClient:
    return FakeQueueClient()


@pytest.fixture
def messages() -> List[Message]:
    return [Message(body=f"msg-{i}") for i in range(13)]
