from __future__ import annotations


def secret_prefix(value: str | None, length: int = 4) -> str:
    """Short, non-reversible form of a credential that is safe to log."""
    if not value:
        return "-"
    return value[:length] + "..."
