from __future__ import annotations


class InputError(ValueError):
    """Raised when an engine receives input it refuses to process."""
