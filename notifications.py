"""
TinyGraph - Notifications
Short-lived toast messages. Times are in milliseconds.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class Toast:
    message: str
    created_at: float
    duration: float

    def elapsed(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float) -> bool:
        return self.elapsed(now) > self.duration


class NotificationQueue:
    """Toasts expire by age, not by count."""

    def __init__(self, default_duration: float = 3000, fade: float = 800,
                 clock: Optional[Callable[[], float]] = None):
        self.default_duration = default_duration
        self.fade = fade
        self._clock = clock or monotonic_ms
        self._toasts: list[Toast] = []

    def push(self, message: str, duration: Optional[float] = None) -> Toast:
        toast = Toast(message, self._clock(), self.default_duration if duration is None else duration)
        self._toasts.append(toast)
        logger.info(f"Toast: {message}")
        return toast

    def expire(self, now: Optional[float] = None) -> None:
        """Drop every toast older than its duration."""
        now = self._clock() if now is None else now
        self._toasts = [t for t in self._toasts if not t.is_expired(now)]

    def active(self, now: Optional[float] = None) -> list[Toast]:
        """Live toasts, newest first (the order they are drawn top-down)."""
        self.expire(now)
        return list(reversed(self._toasts))

    def alpha(self, toast: Toast, now: Optional[float] = None) -> int:
        """255 until the fade window, then linear down to 0."""
        now = self._clock() if now is None else now
        fade_start = toast.duration - self.fade
        elapsed = toast.elapsed(now)
        if elapsed <= fade_start or self.fade <= 0:
            return 255 if elapsed <= toast.duration else 0
        remaining = (toast.duration - elapsed) / self.fade
        return int(max(0.0, min(1.0, remaining)) * 255)

    def __len__(self) -> int:
        return len(self._toasts)

    @property
    def messages(self) -> list[str]:
        return [t.message for t in self._toasts]
