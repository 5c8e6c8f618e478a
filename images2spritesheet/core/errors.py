"""Domain-specific exceptions for the sprite builder."""


class ConfigurationError(ValueError):
    """Raised when layout settings or image geometry are invalid."""


class CollaboratorError(RuntimeError):
    """Raised when the canvas or persistence layer fails."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")
