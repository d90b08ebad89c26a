from __future__ import annotations


class InterlockingError(Exception):
    """Base class for every error raised by the interlocking core."""


# Caller supplied a bad argument (name, route or id)

class DuplicateNameError(InterlockingError, ValueError):
    pass


class NoPathError(InterlockingError, ValueError):
    pass


class UnknownTrainError(InterlockingError, ValueError):
    pass


class UnknownSectionError(InterlockingError, ValueError):
    pass


class CorridorConfigError(InterlockingError, ValueError):
    pass


# Network state forbids the request

class ConstraintViolation(InterlockingError, RuntimeError):
    pass


class ResourceConflict(InterlockingError, RuntimeError):
    pass


class NotInServiceError(InterlockingError, RuntimeError):
    pass
