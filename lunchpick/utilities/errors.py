"""Exception types raised by the recommendation core.

Everything derives from LunchPickError so the view controller can recover
the whole family at one boundary.
"""
from typing import List, Optional


class LunchPickError(Exception):
    """Base class for console errors."""


class TransportError(LunchPickError):
    """The data source failed: connection problem, timeout, 4xx/5xx or an {error} body."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"[{self.status}] {self.message}"


class NoCandidatesError(LunchPickError):
    """The draft generator has no restaurants to pick from."""


class DraftValidationError(LunchPickError):
    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems))
        self.problems = list(problems)


class ReferentialError(LunchPickError):
    """A write references a restaurant that is not in the entity store."""


class InvalidInputError(LunchPickError):
    """Restaurant or menu data failed schema validation."""
