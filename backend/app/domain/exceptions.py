"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class RecordValidationError(Exception):
    """Raised when user input fails validation before any write is attempted."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class PermissionDeniedError(Exception):
    """Raised when the current actor lacks the role an action needs.

    Advisory only: repositories never check roles.
    """

    def __init__(self, required_role: str):
        self.required_role = required_role
        super().__init__(f"This action requires the {required_role} role")


class AuthenticationError(Exception):
    """Raised on a username/password mismatch."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Invalid username or password")


class RepositoryError(Exception):
    """Raised when a storage backend fails to read or write.

    Backend-agnostic — works for the local store, the remote RPC proxy
    and the SQL repositories.
    """

    def __init__(self, backend: str, message: str, status_code: int | None = None):
        self.backend = backend
        self.message = message
        self.status_code = status_code
        prefix = f"[{backend}]" if status_code is None else f"[{backend}] {status_code}:"
        super().__init__(f"{prefix} {message}")


class UnknownActionError(Exception):
    """Raised by the RPC dispatcher for an action name it does not serve."""

    def __init__(self, action: str | None):
        self.action = action
        super().__init__(f"Unknown action: {action}")


class NoPendingConfirmationError(Exception):
    """Raised when confirming while no confirmation prompt is open."""

    def __init__(self) -> None:
        super().__init__("There is no pending confirmation")


class ConfirmationStateError(Exception):
    """Raised when confirming a prompt whose action is already running."""

    def __init__(self, message: str = "A confirmed action is still running"):
        super().__init__(message)


class MutationFailedError(Exception):
    """Raised when a confirmed action fails. No audit entry is written."""

    def __init__(self, description: str, cause: BaseException):
        self.description = description
        self.cause = cause
        super().__init__(f"Operation failed ({description}): {cause}")
