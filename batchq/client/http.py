import httpx
import json
import logging
from typing import Any, Dict, List, Optional
from batchq.core.interfaces import IQueueClient

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/x-amz-json-1.0"


class HttpQueueClient(IQueueClient):
    """Speaks the SQS JSON protocol to an endpoint that accepts unsigned requests.

    Meant for local SQS-compatible servers such as ElasticMQ or LocalStack.
    Non-2xx responses raise httpx.HTTPStatusError.
    """

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
    ):
        self.endpoint_url = endpoint_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def close(self):
        # A client handed in by the caller stays open
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpQueueClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def request(self, operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"SQS {operation} -> {self.endpoint_url}")
        response = self._client.post(
            f"{self.endpoint_url}/",
            content=json.dumps(payload),
            headers={
                "Content-Type": JSON_CONTENT_TYPE,
                "X-Amz-Target": f"AmazonSQS.{operation}",
            },
        )
        response.raise_for_status()
        return response.json() if response.content else {}

    def create_queue(self, name: str, attributes: Dict[str, str]) -> str:
        payload: Dict[str, Any] = {"QueueName": name}
        if attributes:
            payload["Attributes"] = attributes
        return self.request("CreateQueue", payload)["QueueUrl"]

    def get_queue_attributes(self, queue_url: str, names: List[str]) -> Dict[str, Any]:
        result = self.request(
            "GetQueueAttributes", {"QueueUrl": queue_url, "AttributeNames": names}
        )
        return result.get("Attributes", {})

    def send_message_batch(
        self, queue_url: str, entries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return self.request(
            "SendMessageBatch", {"QueueUrl": queue_url, "Entries": entries}
        )

    def delete_message_batch(
        self, queue_url: str, entries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return self.request(
            "DeleteMessageBatch", {"QueueUrl": queue_url, "Entries": entries}
        )

    def receive_message(
        self,
        queue_url: str,
        attribute_names: List[str],
        max_count: int,
        visibility_timeout: Optional[int] = None,
        wait_time_seconds: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        payload: Dict[str, Any] = {
            "QueueUrl": queue_url,
            "AttributeNames": attribute_names,
            "MessageAttributeNames": ["All"],
            "MaxNumberOfMessages": max_count,
        }
        if visibility_timeout is not None:
            payload["VisibilityTimeout"] = visibility_timeout
        if wait_time_seconds is not None:
            payload["WaitTimeSeconds"] = wait_time_seconds

        return self.request("ReceiveMessage", payload).get("Messages", [])
