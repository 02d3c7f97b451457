"""
scoring.py — Substitution scores and affine gap penalties

A ScoringModel is an explicit, immutable value passed into the engine:
a symmetric 4x4 substitution table over {A, C, G, T} (match score on the
diagonal, mismatch score elsewhere) plus two gap penalties stored as
non-negative magnitudes that are subtracted from the score.

    opening a gap costs   gap_open
    each further position gap_extend      (gap_open >= gap_extend >= 0)
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from .default import ALPHABET_TO_INDEX, align_params
from .errors import InvalidScoringModel, InvalidSymbol

Number = Union[int, float]

_INT64_MAX = np.iinfo(np.int64).max


@dataclass(frozen=True)
class ScoringModel:
    """
    Scoring configuration for a single alignment call.

    Attributes
    ----------
    match_score, mismatch_score : number
        Substitution scores on / off the diagonal of the 4x4 table.
        match_score must be strictly greater than mismatch_score.

    gap_open, gap_extend : number
        Affine gap penalty magnitudes.  gap_extend may be fractional;
        it is never rounded.  The engine scores in integers when every
        parameter is a whole number and in floats otherwise.
    """

    match_score: Number
    mismatch_score: Number
    gap_open: Number
    gap_extend: Number
    score_table: NDArray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for name in ("match_score", "mismatch_score", "gap_open", "gap_extend"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
                raise InvalidScoringModel(name, f"expected a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidScoringModel(name, f"expected a finite number, got {value!r}")

        if self.match_score <= self.mismatch_score:
            raise InvalidScoringModel(
                "match_score",
                f"match_score ({self.match_score}) must exceed "
                f"mismatch_score ({self.mismatch_score})",
            )
        if self.gap_extend < 0:
            raise InvalidScoringModel(
                "gap_extend", f"penalties are magnitudes and must be >= 0, got {self.gap_extend}"
            )
        if self.gap_open < 0:
            raise InvalidScoringModel(
                "gap_open", f"penalties are magnitudes and must be >= 0, got {self.gap_open}"
            )
        if self.gap_open < self.gap_extend:
            raise InvalidScoringModel(
                "gap_open",
                f"gap_open ({self.gap_open}) must be >= gap_extend ({self.gap_extend})",
            )

        if self.is_integral:
            for name in ("match_score", "mismatch_score", "gap_open", "gap_extend"):
                value = getattr(self, name)
                if abs(value) > _INT64_MAX:
                    raise InvalidScoringModel(
                        name, f"integral scores must fit in a 64-bit integer, got {value!r}"
                    )

        table = np.full((4, 4), self.mismatch_score, dtype=self.dtype)
        np.fill_diagonal(table, self.match_score)
        table.setflags(write=False)
        object.__setattr__(self, "score_table", table)

    @classmethod
    def from_params(cls, **overrides: Number) -> "ScoringModel":
        """Defaults from default.align_params(), updated with overrides."""
        params = align_params()
        unknown = set(overrides) - set(params)
        if unknown:
            raise TypeError(f"Unknown scoring parameters: {sorted(unknown)}")
        params.update(overrides)
        return cls(**params)

    @property
    def is_integral(self) -> bool:
        """True when every parameter is a whole number."""
        return all(
            float(v).is_integer()
            for v in (self.match_score, self.mismatch_score, self.gap_open, self.gap_extend)
        )

    @property
    def dtype(self):
        """numpy dtype used for the score matrices."""
        return np.int64 if self.is_integral else np.float64

    def substitution(self, a: str, b: str) -> Number:
        """Score for aligning symbol a against symbol b."""
        ia, ib = self.encode(a, name="a"), self.encode(b, name="b")
        if len(ia) != 1 or len(ib) != 1:
            raise ValueError(f"substitution() takes single symbols, got {a!r} and {b!r}")
        return self.score_table[ia[0], ib[0]].item()

    def gap_penalty(self, extend: bool) -> Number:
        """Penalty magnitude for opening (extend=False) or extending a gap."""
        return self.gap_extend if extend else self.gap_open

    def encode(self, seq: str, name: Optional[str] = None) -> NDArray[np.intp]:
        """
        Encode a sequence into alphabet indices.

        Raises InvalidSymbol for any character that is not an uppercase
        A, C, G or T; nothing is mapped to a fallback index.
        """
        codes = np.empty(len(seq), dtype=np.intp)
        for pos, ch in enumerate(seq):
            try:
                codes[pos] = ALPHABET_TO_INDEX[ch]
            except KeyError:
                raise InvalidSymbol(ch, pos, name) from None
        return codes
