"""Exceptions raised by bindflow itself. Errors from user functions propagate as-is."""


class BindingError(Exception):
    """Base class for bindflow errors."""


class BindingArityError(BindingError, TypeError):
    """A function does not accept exactly as many arguments as it has inputs."""


class BindingDisposedError(BindingError, RuntimeError):
    """A disposed node was read or written."""
