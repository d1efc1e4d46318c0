"""
Error types raised by the rating engine.
"""


class RatingError(Exception):
    """Base class for rating engine errors."""


class ValidationError(RatingError, ValueError):
    """Quote request field is missing or out of range. The quote is rejected."""


class LookupUnavailable(RatingError):
    """
    Customer lookup could not answer.

    Raised by lookup collaborators for unknown customers or storage failures.
    The quote service treats it as "precondition not met" and skips the discount.
    """


class InternalInconsistency(RatingError):
    """A ledger invariant was violated. Fatal for the quote being generated."""
