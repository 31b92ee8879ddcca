# taskboard/exceptions.py


class TaskboardError(Exception):
    """Base class for errors raised by the task core"""


class InvalidTimestamp(TaskboardError):
    """A deadline or completion time could not be read as a point in time"""

    def __init__(self, field: str, value=None, reason: str = "could not be parsed"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")
