"""Shared text validators."""

from __future__ import annotations

from typing import Optional


def required_text(v: str, field: str) -> str:
    """Strip ``v`` and reject it when nothing is left."""
    if not v or not v.strip():
        raise ValueError(f"{field} is required")
    return v.strip()


def optional_text(v: Optional[str], field: str) -> Optional[str]:
    """Like :func:`required_text`, but ``None`` passes through."""
    if v is None:
        return v
    return required_text(v, field)
