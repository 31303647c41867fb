"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional


def get_user_identity(request_obj) -> Dict[str, Optional[str]]:
    """Extract user identity information from a request or socket event."""
    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': getattr(request_obj, 'sid', None)
    }


def parse_width(value, default: int, maximum: Optional[int] = None) -> int:
    """
    Reads a grid width sent by the client.

    Raises:
        ValueError: If the value is not a non-negative integer, or exceeds
            `maximum` when one is given
    """
    if value is None or value == '':
        return default

    if isinstance(value, bool):
        raise ValueError("Width must be an integer")

    try:
        width = int(value)
    except (TypeError, ValueError):
        raise ValueError("Width must be an integer")

    if width < 0:
        raise ValueError("Width cannot be negative")
    if maximum is not None and width > maximum:
        raise ValueError(f"Width cannot exceed {maximum}")
    return width
