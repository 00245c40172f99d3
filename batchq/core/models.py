import time
from typing import Any, Callable, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class Validity(BaseModel):
    """Processing window of a received message.

    Calling the instance with no argument answers whether the window has
    elapsed according to `clock`, the same clock the deadline was taken from.
    """

    model_config = ConfigDict(frozen=True)

    deadline: float
    clock: Callable[[], float] = Field(default=time.time, exclude=True, repr=False)

    def is_expired(self, now: float) -> bool:
        return now > self.deadline

    def __call__(self) -> bool:
        return self.is_expired(self.clock())


class Message(BaseModel):
    body: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    validator: Optional[Validity] = None

    def is_valid(self) -> bool:
        """False once the visibility window this message was received in has passed."""
        if self.validator is None:
            return True
        return not self.validator()


class QueueOptions(BaseModel):
    """Queue attributes forwarded to the service when the queue is created."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    delay_seconds: Optional[int] = Field(default=None, alias="DelaySeconds")
    maximum_message_size: Optional[int] = Field(
        default=None, alias="MaximumMessageSize"
    )
    message_retention_period: Optional[int] = Field(
        default=None, alias="MessageRetentionPeriod"
    )
    policy: Optional[str] = Field(default=None, alias="Policy")
    receive_message_wait_time_seconds: Optional[int] = Field(
        default=None, alias="ReceiveMessageWaitTimeSeconds"
    )
    visibility_timeout: Optional[int] = Field(default=None, alias="VisibilityTimeout")

    def to_attributes(self) -> Dict[str, str]:
        # SQS only accepts string attribute values
        return {
            name: str(value)
            for name, value in self.model_dump(by_alias=True, exclude_none=True).items()
        }
