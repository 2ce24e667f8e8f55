"""Participant CQRS APIs."""

from .queries import ParticipantReadApi
from .commands import ParticipantWriteApi

__all__ = [
    "ParticipantReadApi",
    "ParticipantWriteApi",
]
