"""
validation.py — independent baseline and alignment checks for strnw

This module provides an independent score-only implementation of the
semi-global affine recurrence (semiglobal_score) and helpers for
randomized regression tests.

The goals are:

  1. Verify that the numpy engine in dp_core returns the same score as
     a plain-list implementation of the same recurrence and endpoint
     rule.

  2. Verify that every AlignmentResult is internally consistent:
     equal-length strings, no column that is a gap on both sides,
     gap removal reproducing the inputs, and a CIGAR that describes
     the columns one-for-one.

semiglobal_score uses nothing from dp_core, so a bug in the engine
cannot also hide in the baseline.  The checks below go through align()
and read AlignmentResult fields.
"""

from typing import Optional, Tuple

from .aligners import align
from .default import default_scoring
from .dp_core import GAP_CHAR, AlignmentResult
from .scoring import ScoringModel


def semiglobal_score(
    seq_1: str,
    seq_2: str,
    scoring: Optional[ScoringModel] = None,
):
    """
    Free-end-gap affine score of seq_1 (columns) against seq_2 (rows).
    """
    if scoring is None:
        scoring = default_scoring()
    scoring.encode(seq_1, name="seq_1")
    scoring.encode(seq_2, name="seq_2")

    a, b = scoring.match_score, scoring.mismatch_score
    go, ge = scoring.gap_open, scoring.gap_extend
    n, m = len(seq_2), len(seq_1)

    M = [[0] * (m + 1) for _ in range(n + 1)]
    I = [[0] * (m + 1) for _ in range(n + 1)]
    for j in range(1, m + 1):
        I[0][j] = -(go + (j - 1) * ge)
    for i in range(1, n + 1):
        I[i][0] = -(go + (i - 1) * ge)

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            s = a if seq_1[j - 1] == seq_2[i - 1] else b
            M[i][j] = max(M[i - 1][j - 1], I[i - 1][j - 1]) + s
            I[i][j] = max(
                M[i][j - 1] - go,
                I[i][j - 1] - ge,
                M[i - 1][j] - go,
                I[i - 1][j] - ge,
            )

    best = 0
    for i in range(1, n + 1):
        best = max(best, M[i][m], I[i][m])
    for j in range(1, m + 1):
        best = max(best, M[n][j], I[n][j])
    return best


def check_engine_vs_baseline(
    seq_1: str,
    seq_2: str,
    scoring: Optional[ScoringModel] = None,
) -> Tuple[float, float]:
    """
    Compare align() to the independent baseline.

    Returns
    -------
    engine_score, baseline_score
        The caller can assert they are equal.
    """
    engine_score = align(seq_1, seq_2, scoring).score
    baseline_score = semiglobal_score(seq_1, seq_2, scoring)
    return engine_score, baseline_score


# ---------------------------------------------------------------------------
# Alignment validity helper
# ---------------------------------------------------------------------------

def check_alignment_validity(result: AlignmentResult, seq_1: str, seq_2: str) -> Tuple[bool, str]:
    """
    Check that an AlignmentResult is a consistent alignment of seq_1/seq_2.

    Returns
    -------
    (ok, message)
        message is empty when ok is True.
    """
    aln_1, aln_2 = result.aligned_seq_1, result.aligned_seq_2
    if len(aln_1) != len(aln_2):
        return False, f"aligned lengths differ: {len(aln_1)} != {len(aln_2)}"

    if aln_1.replace(GAP_CHAR, "") != seq_1:
        return False, "removing gaps from aligned_seq_1 does not give seq_1"
    if aln_2.replace(GAP_CHAR, "") != seq_2:
        return False, "removing gaps from aligned_seq_2 does not give seq_2"

    expected_ops = []
    for col, (x, y) in enumerate(zip(aln_1, aln_2)):
        if x == GAP_CHAR and y == GAP_CHAR:
            return False, f"double gap at column {col}"
        if x == GAP_CHAR:
            expected_ops.append("D")
        elif y == GAP_CHAR:
            expected_ops.append("I")
        else:
            expected_ops.append("M")

    if len(result.cigar) != len(aln_1):
        return False, f"CIGAR {result.cigar} covers {len(result.cigar)} columns, alignment has {len(aln_1)}"
    if result.cigar.expand() != "".join(expected_ops):
        return False, f"CIGAR {result.cigar} does not match the aligned columns"

    return True, ""
