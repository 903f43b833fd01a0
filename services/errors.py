"""
services.errors - Storage exception hierarchy.

Row-level:  DuplicateQuestionError, PersistenceError
Run-level:  StorageUnavailableError, RunStateError
"""


class StorageError(Exception):
    """Base class for storage failures."""
    pass


class DuplicateQuestionError(StorageError):
    """The unique constraint on question text rejected a write."""
    pass


class PersistenceError(StorageError):
    """A single write was rejected for any other reason."""
    pass


class StorageUnavailableError(StorageError):
    """The database cannot be reached; not specific to any one row."""
    pass


class RunStateError(StorageError):
    """Attempt to modify an upload run that already finished."""
    pass
