"""Error types for Stillwater.

Field validation failures are not exceptions: they are returned as a
mapping of field name to message and shown inline next to the field.
"""

from typing import Dict

# field name -> message; an empty mapping means the draft is valid
ValidationErrors = Dict[str, str]


class StillwaterError(Exception):
    """Base class for Stillwater errors."""


class PersistenceReadError(StillwaterError):
    """A stored payload could not be read or decoded.

    Callers recover by falling back to defaults.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to load '{key}': {reason}")


class PersistenceWriteError(StillwaterError):
    """A payload could not be written to its storage slot.

    The in-memory commit has already taken effect when this is raised.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to save '{key}': {reason}")


class PreconditionViolation(StillwaterError):
    """An operation was requested on state that does not allow it.

    Managers ignore these requests rather than raising; the type names
    the rejection in log records.
    """
