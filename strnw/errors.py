"""
errors.py — Exceptions raised by strnw

All errors are ValueError subclasses so callers that only guard against
bad input with ``except ValueError`` keep working.
"""

from __future__ import annotations

from typing import Optional


class AlignmentError(ValueError):
    """Base exception for all strnw errors."""


class InvalidSymbol(AlignmentError):
    """
    A sequence contains a character outside the accepted alphabet.

    Attributes
    ----------
    symbol : str
        The offending character.
    position : int
        0-based position of the character in its sequence.
    sequence_name : str or None
        Which input carried it ("seq_1", "seq_2", a read name, ...).
    """

    def __init__(self, symbol: str, position: int, sequence_name: Optional[str] = None):
        self.symbol = symbol
        self.position = position
        self.sequence_name = sequence_name
        where = f" in {sequence_name}" if sequence_name else ""
        super().__init__(
            f"Invalid symbol {symbol!r} at position {position}{where}; "
            "expected one of A, C, G, T (uppercase)"
        )


class InvalidScoringModel(AlignmentError):
    """
    Scoring parameters violate the affine-gap model constraints.

    Attributes
    ----------
    field : str
        Name of the parameter that failed validation.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid scoring model ({field}): {message}")
