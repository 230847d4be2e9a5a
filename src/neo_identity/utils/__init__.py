"""Utility helpers for neo-identity."""

from .datetime import Clock, ensure_utc, utc_now
from .uuid import generate_stamp, generate_uuid_v7

__all__ = [
    "Clock",
    "ensure_utc",
    "utc_now",
    "generate_stamp",
    "generate_uuid_v7",
]
