from __future__ import annotations


class InvalidRequest(ValueError):
    """Raised when a call request names an unknown floor or direction."""
