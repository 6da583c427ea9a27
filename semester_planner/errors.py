"""Errors raised when a domain rule is broken."""


class DomainError(Exception):
    """A request conflicts with the rules of the planning domain."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message