"""Shared utilities."""
import time


def now_ms() -> int:
    """Current time as Unix epoch milliseconds."""
    return int(time.time() * 1000)


def dedupe(values: list[str]) -> list[str]:
    """Drop repeated entries, keeping first-seen order."""
    return list(dict.fromkeys(values))
