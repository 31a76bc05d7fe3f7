"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the bot."""

    # Backend errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Authorization errors
    STAFF_ONLY = "STAFF_ONLY"
    GUILD_ONLY = "GUILD_ONLY"

    # PokéAPI errors
    POKEAPI_ERROR = "POKEAPI_ERROR"
    POKEMON_NOT_FOUND = "POKEMON_NOT_FOUND"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(self.message)


class BackendError(AppException):
    """The relational backend failed (connectivity, constraint, pool exhaustion)."""

    def __init__(self, message: str = "Database operation failed") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
        )


class ValidationError(AppException):
    """One or more submitted fields failed format validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="\n".join(self.errors),
            details={"errors": self.errors},
        )


class StaffOnlyError(AppException):
    """A staff-only action was attempted by a non-staff member."""

    def __init__(self, command_name: str) -> None:
        self.command_name = command_name
        super().__init__(
            error_code=ErrorCode.STAFF_ONLY,
            message=f"`/{command_name}` can only be used by staff.",
            details={"command_name": command_name},
        )


class MemberRequiredError(AppException):
    """The command needs a guild member but was used outside a server."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.GUILD_ONLY,
            message="This command can only be used in a server.",
        )


class PokeApiError(AppException):
    """PokéAPI request failed."""

    def __init__(self, message: str = "Failed to get resource from PokéAPI") -> None:
        super().__init__(
            error_code=ErrorCode.POKEAPI_ERROR,
            message=message,
        )


class PokemonNotFoundError(AppException):
    """No Pokémon exists with the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            error_code=ErrorCode.POKEMON_NOT_FOUND,
            message=f"Pokémon not found: {name}",
            details={"name": name},
        )
