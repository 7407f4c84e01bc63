"""Domain layer errors.

All of these represent caller or business-rule violations. None of them
is transient, so nothing in the application retries on them.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input, e.g. a vote direction other than up/down."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is absent or soft-deleted."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when a user attempts an action reserved for someone else."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class InvalidOperationError(DomainError):
    """Raised when an operation violates a business rule.

    Examples: voting on your own content, unaccepting an answer that is
    not the accepted one, deleting an accepted answer.
    """

    def __init__(self, message: str):
        super().__init__(message)


class ConflictError(DomainError):
    """Raised when a concurrent update keeps winning the race."""

    def __init__(self, resource: str, identifier: str, attempts: int | None = None):
        self.resource = resource
        self.identifier = identifier
        self.attempts = attempts
        detail = f" after {attempts} attempts" if attempts else ""
        super().__init__(f"Concurrent update on {resource} {identifier}{detail}")
