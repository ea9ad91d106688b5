"""Helpers shared by route modules."""
from typing import Any


def json_object(body: Any) -> dict[str, Any]:
    """Treat a missing or non-object JSON body as empty.

    Field checks then run in the service, after authorization.
    """
    return body if isinstance(body, dict) else {}
