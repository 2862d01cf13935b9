"""Shared utilities."""

from .datetime import now_utc, parse_timestamp, unix_millis

__all__ = ["now_utc", "parse_timestamp", "unix_millis"]
