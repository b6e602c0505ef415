"""Domain layer errors.

Every error kind maps to its own HTTP status in the interface layer, so
callers can tell "not your comment" from "comment does not exist" from
"thread too deep".
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidInputError(DomainError):
    """Missing or malformed input (empty content, bad vote target, ...)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to delete content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to delete {resource} {resource_id}"
        )


class DepthLimitExceededError(DomainError):
    """Raised when a reply would nest deeper than the thread allows."""

    def __init__(self, parent_id: str, max_level: int):
        self.parent_id = parent_id
        self.max_level = max_level
        super().__init__(
            f"Cannot reply to comment {parent_id}: maximum nesting level "
            f"({max_level}) reached"
        )


class ConflictError(DomainError):
    """Raised when a uniqueness race could not be resolved locally."""

    pass


class StorageUnavailableError(DomainError):
    """Raised when the relational store cannot be reached."""

    pass
