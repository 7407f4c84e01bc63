"""Notification adapters."""

from .dispatcher import QueueNotificationDispatcher

__all__ = ["QueueNotificationDispatcher"]
