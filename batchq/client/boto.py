from typing import Any, Dict, List, Optional
import boto3
from botocore.client import BaseClient
from batchq.core.interfaces import IQueueClient


class BotoQueueClient(IQueueClient):
    """IQueueClient backed by a boto3 SQS client. Errors are not caught."""

    def __init__(self, sqs: BaseClient):
        self.sqs = sqs

    @classmethod
    def from_config(
        cls, region: Optional[str] = None, endpoint_url: Optional[str] = None
    ) -> "BotoQueueClient":
        return cls(boto3.client("sqs", region_name=region, endpoint_url=endpoint_url))

    def close(self):
        self.sqs.close()

    def create_queue(self, name: str, attributes: Dict[str, str]) -> str:
        response = self.sqs.create_queue(QueueName=name, Attributes=attributes)
        return response["QueueUrl"]

    def get_queue_attributes(self, queue_url: str, names: List[str]) -> Dict[str, Any]:
        response = self.sqs.get_queue_attributes(
            QueueUrl=queue_url, AttributeNames=names
        )
        return response.get("Attributes", {})

    def send_message_batch(
        self, queue_url: str, entries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return self.sqs.send_message_batch(QueueUrl=queue_url, Entries=entries)

    def delete_message_batch(
        self, queue_url: str, entries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return self.sqs.delete_message_batch(QueueUrl=queue_url, Entries=entries)

    def receive_message(
        self,
        queue_url: str,
        attribute_names: List[str],
        max_count: int,
        visibility_timeout: Optional[int] = None,
        wait_time_seconds: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {
            "QueueUrl": queue_url,
            "AttributeNames": attribute_names,
            "MessageAttributeNames": ["All"],
            "MaxNumberOfMessages": max_count,
        }
        if visibility_timeout is not None:
            params["VisibilityTimeout"] = visibility_timeout
        if wait_time_seconds is not None:
            params["WaitTimeSeconds"] = wait_time_seconds

        response = self.sqs.receive_message(**params)
        return response.get("Messages", [])
