"""Typed chat platform models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChatMessage:
    id: str
    author_id: str


@dataclass(frozen=True)
class SentMessage:
    id: str


@dataclass(frozen=True)
class InboundMessage:
    content: str
    author_id: str
    channel_id: str
    author_is_bot: bool
