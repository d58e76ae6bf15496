"""Typed game errors.

Every mutating operation raises one of these before touching state, so a
failed call leaves the aggregate exactly as it was. ``to_dict`` gives the
``{"error": code, ...}`` payload the API returns.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any


class GameError(Exception):
    code = "game_error"

    def __init__(self, message: str = "", **details: Any):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.details = details

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        payload.update(self.details)
        return payload


class InsufficientFunds(GameError):
    code = "insufficient_funds"

    def __init__(self, required: Decimal, available: Decimal):
        super().__init__(
            f"need {required:.2f}, have {available:.2f}",
            required=round(required, 2),
            have=round(available, 2),
        )
        self.required = required
        self.available = available


class NotFound(GameError):
    code = "not_found"

    def __init__(self, kind: str, identifier: Any):
        super().__init__(f"{kind} {identifier} not found", kind=kind, id=str(identifier))
        self.kind = kind
        self.identifier = identifier


class InvalidTransition(GameError):
    code = "invalid_transition"


class ValidationFailure(GameError):
    code = "validation_failed"


class AuthenticationError(GameError):
    code = "unauthorized"
