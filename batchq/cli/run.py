import argparse
import logging
import sys
from typing import List, Optional
from batchq.adapter.sqs import SqsAdapter
from batchq.client.boto import BotoQueueClient
from batchq.client.http import HttpQueueClient
from batchq.core.exceptions import AdapterException
from batchq.core.factory import MessageFactory
from batchq.core.interfaces import IQueueClient
from batchq.core.models import Message, QueueOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Batch SQS queue client")
    parser.add_argument("--endpoint-url", default=None, help="Service endpoint URL")
    parser.add_argument("--region", default=None, help="AWS region")
    parser.add_argument(
        "--transport",
        choices=["boto", "http"],
        default="boto",
        help="boto3 client, or unsigned JSON over HTTP for local emulators",
    )
    parser.add_argument(
        "--visibility-timeout",
        type=int,
        default=None,
        help="Queue visibility timeout in seconds",
    )
    parser.add_argument(
        "--wait-time", type=int, default=None, help="Receive long-poll seconds"
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")

    commands = parser.add_subparsers(dest="command", required=True)

    send = commands.add_parser("send", help="Enqueue message bodies")
    send.add_argument("queue")
    send.add_argument("bodies", nargs="+")

    receive = commands.add_parser("receive", help="Dequeue and print message bodies")
    receive.add_argument("queue")
    receive.add_argument("--limit", type=int, default=10)
    receive.add_argument(
        "--ack", action="store_true", help="Acknowledge messages once printed"
    )
    return parser


def build_client(args: argparse.Namespace) -> IQueueClient:
    if args.transport == "http":
        if not args.endpoint_url:
            raise SystemExit("--endpoint-url is required with --transport http")
        return HttpQueueClient(args.endpoint_url)
    return BotoQueueClient.from_config(args.region, args.endpoint_url)


def main(argv: Optional[List[str]] = None, client: Optional[IQueueClient] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    options = QueueOptions(
        visibility_timeout=args.visibility_timeout,
        receive_message_wait_time_seconds=args.wait_time,
    )
    owned = client is None
    if owned:
        client = build_client(args)
    adapter = SqsAdapter(client, args.queue, options)

    try:
        if args.command == "send":
            adapter.enqueue([Message(body=body) for body in args.bodies])
            print(f"Sent {len(args.bodies)} message(s) to {args.queue}")
        else:
            received = []
            for message in adapter.dequeue(MessageFactory(), args.limit):
                print(message.body)
                received.append(message)
            if args.ack and received:
                adapter.acknowledge(received)
    except AdapterException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if owned:
            client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
