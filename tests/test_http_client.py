import json
import httpx
import pytest
from batchq.adapter.sqs import SqsAdapter
from batchq.client.http import HttpQueueClient
from batchq.core.exceptions import FailedAcknowledgement
from batchq.core.factory import MessageFactory
from batchq.core.models import Message

ENDPOINT = "http://localhost:9324"
QUEUE_URL = f"{ENDPOINT}/000000000000/foo"


def make_client(handler) -> HttpQueueClient:
    return HttpQueueClient(
        ENDPOINT, client=httpx.Client(transport=httpx.MockTransport(handler))
    )


def test_request_shape():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"QueueUrl": QUEUE_URL})

    with make_client(handler) as client:
        assert client.create_queue("foo", {"VisibilityTimeout": "30"}) == QUEUE_URL

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == f"{ENDPOINT}/"
    assert request.headers["X-Amz-Target"] == "AmazonSQS.CreateQueue"
    assert request.headers["Content-Type"] == "application/x-amz-json-1.0"
    assert json.loads(request.content) == {
        "QueueName": "foo",
        "Attributes": {"VisibilityTimeout": "30"},
    }


def test_adapter_round_trip_over_http():
    operations = []

    def handler(request: httpx.Request) -> httpx.Response:
        operation = request.headers["X-Amz-Target"].split(".", 1)[1]
        payload = json.loads(request.content)
        operations.append((operation, payload))
        if operation == "CreateQueue":
            return httpx.Response(200, json={"QueueUrl": QUEUE_URL})
        if operation == "GetQueueAttributes":
            return httpx.Response(200, json={"Attributes": {"VisibilityTimeout": "30"}})
        if operation == "ReceiveMessage":
            return httpx.Response(
                200,
                json={
                    "Messages": [
                        {
                            "MessageId": "m-1",
                            "ReceiptHandle": "rh-1",
                            "Body": "hello",
                            "MD5OfBody": "x",
                        }
                    ]
                },
            )
        if operation == "DeleteMessageBatch":
            return httpx.Response(
                200,
                json={
                    "Successful": [],
                    "Failed": [
                        {"Id": "0", "SenderFault": True, "Code": "ReceiptHandleIsInvalid"}
                    ],
                },
            )
        return httpx.Response(400, json={"__type": "InvalidAction"})

    adapter = SqsAdapter(make_client(handler), "foo")

    received = list(adapter.dequeue(MessageFactory(), 5))
    with pytest.raises(FailedAcknowledgement) as exc_info:
        adapter.acknowledge(received)

    assert exc_info.value.messages == received
    assert [op for op, _ in operations] == [
        "CreateQueue",
        "GetQueueAttributes",
        "ReceiveMessage",
        "DeleteMessageBatch",
    ]
    assert operations[0][1] == {"QueueName": "foo"}
    assert operations[2][1] == {
        "QueueUrl": QUEUE_URL,
        "AttributeNames": ["All"],
        "MessageAttributeNames": ["All"],
        "MaxNumberOfMessages": 5,
        "VisibilityTimeout": 30,
    }
    assert received[0].metadata == {
        "Attributes": {},
        "MessageAttributes": {},
        "MessageId": "m-1",
        "ReceiptHandle": "rh-1",
    }


def test_http_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"__type": "AccessDenied"})

    adapter = SqsAdapter(make_client(handler), "foo")

    with pytest.raises(httpx.HTTPStatusError):
        adapter.enqueue([Message(body="x")])


def test_close_leaves_passed_in_client_open():
    http = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(200))
    )

    with HttpQueueClient(ENDPOINT, client=http):
        pass

    assert not http.is_closed
    http.close()


def test_close_shuts_own_client():
    client = HttpQueueClient(ENDPOINT)

    client.close()

    assert client._client.is_closed
