"""Error taxonomy shared by the core services and the HTTP layer."""


class MercadoError(Exception):
    """Base error. `user_message` is short and safe to show as-is."""

    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


class ValidationError(MercadoError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class InsufficientCategory(MercadoError):
    def __init__(self, category: str) -> None:
        super().__init__(f"no {category.lower()} recipes available for your profile")
        self.category = category

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InsufficientCategory) and other.category == self.category

    def __hash__(self) -> int:
        return hash(("InsufficientCategory", self.category))

    def __repr__(self) -> str:
        return f"InsufficientCategory({self.category!r})"


class RemoteUnavailable(MercadoError):
    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        super().__init__("remote store unavailable, working offline")
        self.operation = operation
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.operation}: {self.cause!r}" if self.cause else self.operation


class DecodeError(MercadoError):
    def __init__(self, doc_id: object, reason: str) -> None:
        super().__init__(f"document {doc_id} could not be read: {reason}")
        self.doc_id = doc_id
        self.reason = reason


class AuthError(MercadoError):
    pass


class NotFound(MercadoError):
    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} {key} not found")
        self.kind = kind
        self.key = key
