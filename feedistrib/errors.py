"""Errors raised by the fee distributor."""

from __future__ import annotations


class ContractError(Exception):
    """Base class of every error the distributor raises."""

    message = "Contract error"

    def __str__(self) -> str:
        return self.message


class StdError(ContractError):
    """A generic error that carries a free-form message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Generic error: {self.message}"


class OverflowError_(StdError):
    """An arithmetic operation left the range of a 128-bit unsigned integer."""

    def __init__(self, operation: str, operand1: int, operand2: int) -> None:
        self.operation = operation
        self.operand1 = operand1
        self.operand2 = operand2
        super().__init__(f"Cannot {operation} with {operand1} and {operand2}")

    def __str__(self) -> str:
        return f"Overflow: {self.message}"


class Unauthorized(ContractError):
    """The sender may not perform this action."""

    message = "Unauthorized"


class ClaimLimitExceeded(ContractError):
    """Too many accounts were given to a single claim operation."""

    message = "Exceeded account limit for the claim operation!"


class ClaimDisabled(ContractError):
    """Claiming is switched off by the owner."""

    message = "Claiming is disabled!"