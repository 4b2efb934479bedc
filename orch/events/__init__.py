"""Inbound events and their routing."""

from .model import Event, EventKind, Project
from .router import EventRouter, Handler

__all__ = [
    "Event",
    "EventKind",
    "EventRouter",
    "Handler",
    "Project",
]
