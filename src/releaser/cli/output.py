"""Output formatting helpers for the releaser CLI."""

from __future__ import annotations

import json
from typing import Any

__all__ = [
    "format_error",
    "format_success",
    "format_json",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error("Push failed", suggestion="Check the remote URL"))
        Error: Push failed
        Suggestion: Check the remote URL
    """
    lines = [f"Error: {message}"]
    for detail in details or []:
        lines.append(f"  {detail}")
    if suggestion:
        lines.append(f"Suggestion: {suggestion}")
    return "\n".join(lines)


def format_success(message: str) -> str:
    """Format a success message.

    Example:
        >>> format_success("Release committed")
        'Success: Release committed'
    """
    return f"Success: {message}"


def format_json(data: Any) -> str:
    """Format data as indented JSON."""
    return json.dumps(data, indent=2)
