"""
Default notification sink: keeps user-facing messages and mirrors them to the log.
"""
from __future__ import annotations
from dataclasses import dataclass

from .config import SLICE_CONFIG, Severity
from ..utils.logger import logger


@dataclass(frozen=True, slots=True)
class Message:
    text: str
    severity: Severity
    timeout_ms: int


class MessageLog:
    """Collects messages in arrival order. Can be passed anywhere a NotifyFunc is expected."""

    def __init__(self) -> None:
        self.messages: list[Message] = []

    def __call__(
        self,
        message: str,
        severity: Severity = Severity.INFO,
        timeout_ms: int = SLICE_CONFIG.message_timeout_ms,
    ) -> None:
        self.messages.append(Message(message, severity, timeout_ms))
        if severity is Severity.ERROR:
            logger.error(message)
        elif severity is Severity.WARNING:
            logger.warning(message)
        else:
            logger.info(message)

    def __len__(self) -> int:
        return len(self.messages)

    @property
    def last(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()
