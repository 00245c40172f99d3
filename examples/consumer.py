import random
import time
from batchq.adapter.sqs import SqsAdapter
from batchq.client.http import HttpQueueClient
from batchq.core.exceptions import FailedAcknowledgement
from batchq.core.factory import MessageFactory


def main():
    with HttpQueueClient("http://localhost:9324") as client:
        adapter = SqsAdapter(
            client,
            "demo-queue",
            {"VisibilityTimeout": 10, "ReceiveMessageWaitTimeSeconds": 5},
        )
        factory = MessageFactory()

        print("Consumer started. Polling for messages...")
        while True:
            done = []
            for message in adapter.dequeue(factory, 5):
                # Simulate processing work
                time.sleep(random.uniform(0.5, 3.0))

                if message.is_valid():
                    done.append(message)
                    print(f"Processed {message.metadata['MessageId']}: {message.body}")
                else:
                    print(
                        f"Visibility window passed for {message.metadata['MessageId']}, "
                        "leaving it for redelivery"
                    )

            if done:
                try:
                    adapter.acknowledge(done)
                except FailedAcknowledgement as e:
                    print(f"Failed to acknowledge {len(e.messages)} messages")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
