"""
Ledger event notifications.

Event shapes:
  Recorded   -> id, sender, receiver, amount, timestamp
  Flagged    -> id, reason
  KycUpdated -> party, tag

Publishing is fire-and-forget. Ledger operations call `emit()`, which logs
and drops any publisher failure instead of failing the write.
"""
import logging
from abc import ABC, abstractmethod
from typing import Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)
event_logger = logging.getLogger("flowledger.events")


class Recorded(BaseModel):
    id: str
    sender: str
    receiver: str
    amount: int
    timestamp: int


class Flagged(BaseModel):
    id: str
    reason: str


class KycUpdated(BaseModel):
    party: str
    tag: str


LedgerEvent = Union[Recorded, Flagged, KycUpdated]


class BaseNotifier(ABC):
    """Abstract sink for ledger events."""

    @abstractmethod
    def publish(self, event: LedgerEvent) -> None:
        pass


class LoggingNotifier(BaseNotifier):
    def publish(self, event: LedgerEvent) -> None:
        event_logger.info("%s %s", type(event).__name__, event.model_dump_json())


def emit(notifier: BaseNotifier, event: LedgerEvent) -> None:
    try:
        notifier.publish(event)
    except Exception:
        logger.exception(f"Failed to publish {type(event).__name__} event")
