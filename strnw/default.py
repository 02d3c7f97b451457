"""
default.py — Default parameters for strnw

Provides the DNA alphabet and the +2/-2/(6, 0) scoring scheme used by
the genotyper's re-alignment step, and throughout examples and tests.
"""

import numpy as np

# DNA alphabet
BASES = np.array(["A", "C", "G", "T"])
ALPHABET_TO_INDEX = {b: i for i, b in enumerate(BASES)}

# Substitution scores
MATCH_SCORE = 2
MISMATCH_SCORE = -2

## Affine gap penalties, stored as positive magnitudes.
## The genotyper declared a 0.1 extension cost as an int, so the value
## it actually ran with is 0.
GAP_OPEN = 6
GAP_EXTEND = 0


def align_params() -> dict:
    """
    Bundle default scoring parameters into a dict for easy unpacking.

    Usage:
        scoring = ScoringModel(**align_params())"""
    return {
        "match_score": MATCH_SCORE,
        "mismatch_score": MISMATCH_SCORE,
        "gap_open": GAP_OPEN,
        "gap_extend": GAP_EXTEND,
    }


def default_scoring():
    """
    Convenience helper returning a ScoringModel built from the defaults.
    """
    from .scoring import ScoringModel

    return ScoringModel(**align_params())
