from typing import Iterator, List, Sequence, Tuple, TypeVar

T = TypeVar("T")

# Documented per-call limits of the service
BATCHSIZE_DELETE = 10
BATCHSIZE_RECEIVE = 10
BATCHSIZE_SEND = 10


def chunk(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Splits items into contiguous batches of at most `size`, preserving order."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def number_entries(batch: Sequence[T]) -> List[Tuple[str, T]]:
    """Pairs each item with its batch-local correlation id ("0", "1", ...)."""
    return [(str(local_id), item) for local_id, item in enumerate(batch)]


def batch_count(limit: int, size: int) -> int:
    return -(-limit // size)


def receive_plan(limit: int, size: int = BATCHSIZE_RECEIVE) -> List[int]:
    """Requested message count of every receive call needed for `limit`.

    The last call asks for the remainder; an exact multiple of `size` asks
    for a full batch rather than zero.
    """
    if limit < 0:
        raise ValueError(f"Limit must not be negative, got {limit}")
    batches = batch_count(limit, size)
    plan = [size] * batches
    # An exact multiple keeps a full last batch instead of requesting 0,
    # which SQS rejects (valid range 1-10); omitting it would mean 1.
    if batches and limit % size:
        plan[-1] = limit % size
    return plan
