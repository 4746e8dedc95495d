from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    id: int
    name: str
    color: str | None = None  # hex colour assigned by the owner, e.g. "#3b82f6"
    photo_url: str | None = None
