"""Domain errors raised by the task store."""


class TaskError(Exception):
    """Base class for recoverable task errors."""

    pass


class ValidationError(TaskError):
    """Raised when a required field is missing or unparseable."""

    pass


class NotFoundError(TaskError):
    """Raised when an operation references a task id that does not exist."""

    pass
