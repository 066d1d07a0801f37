"""Exception types raised by gitguard."""


class GuardError(RuntimeError):
    """Base class for errors that abort a guard run before aggregation."""


class PreconditionError(GuardError):
    """Raised when the guard is not running inside a git work tree."""


class ConfigError(GuardError):
    """Raised when a gitguard config file is malformed."""


class InputError(GuardError):
    """Raised when hook input (pre-push stdin) cannot be parsed."""
