"""Renderer error types."""

from __future__ import annotations


class RenderError(Exception):
    """Drawing or PNG encoding of the dashboard failed."""
