"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeConfig:
    name: str
    background: str
    title: str
    text_primary: str


@dataclass(frozen=True)
class DashboardImage:
    name: str
    data: bytes
