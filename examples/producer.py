import json
from batchq.adapter.sqs import SqsAdapter
from batchq.client.http import HttpQueueClient
from batchq.core.exceptions import FailedEnqueue
from batchq.core.models import Message


def main():
    # ElasticMQ listening on its default port
    with HttpQueueClient("http://localhost:9324") as client:
        adapter = SqsAdapter(client, "demo-queue", {"VisibilityTimeout": 30})

        messages = [
            Message(
                body=json.dumps({"text": f"Hello world {i}", "value": i}),
                metadata={
                    "MessageAttributes": {
                        "source": {"DataType": "String", "StringValue": "example-script"}
                    }
                },
            )
            for i in range(25)
        ]

        print(f"Sending {len(messages)} messages in batches of ten...")
        try:
            adapter.enqueue(messages)
        except FailedEnqueue as e:
            print(f"{len(e.messages)} messages were rejected")


if __name__ == "__main__":
    main()
