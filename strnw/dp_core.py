"""
dp_core.py — affine-gap semi-global dynamic programming core

This module implements the alignment engine: a two-state Gotoh-style
recurrence (M = ends in a match/mismatch, I = ends in a gap, in either
direction), a free-end-gap endpoint search over the last row and last
column, and a pointer-following traceback.

Rows index seq_2 (reference), columns index seq_1 (query):

    M[i, j] = max(M[i-1, j-1], I[i-1, j-1]) + s(seq_1[j-1], seq_2[i-1])
    I[i, j] = max(M[i, j-1] - open,  I[i, j-1] - extend,
                  M[i-1, j] - open,  I[i-1, j] - extend)

Ties go to the earliest candidate in the order written above.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .cigar import Cigar
from .scoring import ScoringModel

logger = logging.getLogger(__name__)

STATE_M = 0
STATE_I = 1

GAP_CHAR = "-"


class Trace(IntEnum):
    """Traceback pointer stored per cell of M_trace / I_trace."""

    START = 0
    DIAG_M = 1  # M <- M[i-1, j-1]
    DIAG_I = 2  # M <- I[i-1, j-1]
    LEFT_M = 3  # I <- M[i, j-1]    gap open
    LEFT_I = 4  # I <- I[i, j-1]    gap extend
    UP_M = 5    # I <- M[i-1, j]    gap open
    UP_I = 6    # I <- I[i-1, j]    gap extend


_M_POINTERS = (Trace.DIAG_M, Trace.DIAG_I)
_I_POINTERS = (Trace.LEFT_M, Trace.LEFT_I, Trace.UP_M, Trace.UP_I)

# pointer -> (row step, column step, predecessor state)
_MOVES = {
    Trace.DIAG_M: (1, 1, STATE_M),
    Trace.DIAG_I: (1, 1, STATE_I),
    Trace.LEFT_M: (0, 1, STATE_M),
    Trace.LEFT_I: (0, 1, STATE_I),
    Trace.UP_M:   (1, 0, STATE_M),
    Trace.UP_I:   (1, 0, STATE_I),
}


# ---------------------------------------------------------------------------
# Input, DP state and output containers
# ---------------------------------------------------------------------------

@dataclass
class AlignInput:
    """
    Configuration for a single DP run.

    Sequences are encoded on construction, so an InvalidSymbol is raised
    before any matrix is allocated.

    Attributes
    ----------
    seq_1, seq_2 : str
        Query (columns) and reference (rows).
    scoring : ScoringModel
        Substitution table and gap penalties.
    """

    seq_1: str
    seq_2: str
    scoring: ScoringModel
    codes_1: NDArray[np.intp] = field(init=False, repr=False)
    codes_2: NDArray[np.intp] = field(init=False, repr=False)

    def __post_init__(self):
        self.codes_1 = self.scoring.encode(self.seq_1, name="seq_1")
        self.codes_2 = self.scoring.encode(self.seq_2, name="seq_2")

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, columns) of every DP matrix."""
        return len(self.seq_2) + 1, len(self.seq_1) + 1

    def row_scores(self, i: int) -> NDArray:
        """
        Substitution scores s(seq_1[j-1], seq_2[i-1]) for j = 1..L1 of DP row i.
        """
        return self.scoring.score_table[self.codes_1, self.codes_2[i - 1]]


@dataclass
class AlignmentData:
    """
    DP score and traceback arrays, each of shape (L2 + 1, L1 + 1).

    Score layers
    ------------
    M : best score of an alignment ending in a match/mismatch at (i, j).
    I : best score of an alignment ending in a gap at (i, j).

    Traceback layers
    ----------------
    M_trace, I_trace : Trace values (int8) naming the predecessor cell
    and state of the corresponding score layer.
    """

    M: NDArray
    I: NDArray
    M_trace: NDArray[np.int8]
    I_trace: NDArray[np.int8]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.M.shape

    def _check(self, i: int, j: int) -> None:
        rows, cols = self.M.shape
        if not (0 <= i < rows and 0 <= j < cols):
            raise IndexError(f"cell ({i}, {j}) outside {rows}x{cols} DP matrix")

    def score(self, state: int, i: int, j: int):
        """Score stored for `state` at cell (i, j)."""
        self._check(i, j)
        return (self.M if state == STATE_M else self.I)[i, j]

    def pointer(self, state: int, i: int, j: int) -> Trace:
        """Traceback pointer stored for `state` at cell (i, j)."""
        self._check(i, j)
        return Trace(int((self.M_trace if state == STATE_M else self.I_trace)[i, j]))


@dataclass
class AlignmentResult:
    """
    Result of a single alignment call.

    Attributes
    ----------
    aligned_seq_1, aligned_seq_2 : str
        Equal-length aligned strings, '-' marking gaps.

    score : int or float
        Score at the chosen endpoint; int when the scoring model is
        integral.

    cigar : Cigar
        Run-length edit description, one column per aligned position.
        I = gap in seq_2, D = gap in seq_1.

    start, end : (row, col)
        DP cells where the traceback met the first row/column and where
        it began.  The penalised part of the alignment spans rows
        start[0]+1..end[0] of seq_2 and columns start[1]+1..end[1] of
        seq_1; everything outside is free end gap.

    path : list of (i, j, state)
        DP cells visited by the traceback, start to end, state in
        {0, 1} for (M, I).

    data : AlignmentData or None
        Full DP tables, if requested.
    """

    aligned_seq_1: str
    aligned_seq_2: str
    score: Union[int, float]
    cigar: Cigar
    start: Tuple[int, int]
    end: Tuple[int, int]
    path: List[Tuple[int, int, int]]
    data: Optional[AlignmentData] = None

    @property
    def cigar_string(self) -> str:
        return self.cigar.string

    def to_tuple(self) -> Tuple[str, str, Union[int, float], str]:
        """
        (aligned_seq_1, aligned_seq_2, score, cigar_string)
        """
        return (self.aligned_seq_1, self.aligned_seq_2, self.score, self.cigar.string)


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

def init_matrices(config: AlignInput) -> AlignmentData:
    """
    Allocate and initialize the DP arrays.

    M is 0 along row 0 and column 0, so an alignment may start after any
    prefix of either sequence at no cost.  I carries the affine cost of
    a leading gap; it never beats the free M boundary but gives every
    boundary cell a finite value.
    """
    rows, cols = config.shape
    go, ge = config.scoring.gap_open, config.scoring.gap_extend
    dtype = config.scoring.dtype

    M = np.zeros((rows, cols), dtype=dtype)
    I = np.zeros((rows, cols), dtype=dtype)
    M_trace = np.full((rows, cols), Trace.START, dtype=np.int8)
    I_trace = np.full((rows, cols), Trace.START, dtype=np.int8)

    # First row: leading query characters against nothing (move left)
    for j in range(1, cols):
        I[0, j] = -(go + (j - 1) * ge)
        M_trace[0, j] = Trace.LEFT_M
        I_trace[0, j] = Trace.LEFT_M

    # First column: leading reference characters against nothing (move up)
    for i in range(1, rows):
        I[i, 0] = -(go + (i - 1) * ge)
        M_trace[i, 0] = Trace.UP_M
        I_trace[i, 0] = Trace.UP_M

    return AlignmentData(M=M, I=I, M_trace=M_trace, I_trace=I_trace)


# ---------------------------------------------------------------------------
# Row update
# ---------------------------------------------------------------------------

def row_update(config: AlignInput, data: AlignmentData, i: int) -> None:
    """
    Fill row i of M, I and their pointers from row i-1.

    M and the two "up" candidates of I depend only on row i-1 and are
    computed as vectors.  The "left" candidates of I chain along the row,
    so that part is a running loop over plain Python numbers.

    Every comparison is strict in candidate order, so the first maximum
    wins exactly as np.argmax would pick it per cell.
    """
    M, I = data.M, data.I
    go, ge = config.scoring.gap_open, config.scoring.gap_extend

    # M: match/mismatch (diagonal)
    diag_M = M[i - 1, :-1]
    diag_I = I[i - 1, :-1]
    scores = config.row_scores(i)
    from_M = diag_M + scores
    from_I = diag_I + scores
    use_I = from_I > from_M
    M[i, 1:] = np.where(use_I, from_I, from_M)
    data.M_trace[i, 1:] = np.where(use_I, Trace.DIAG_I, Trace.DIAG_M)

    # I, up candidates: open from M, extend from I (gap in seq_1)
    up_open = M[i - 1, 1:] - go
    up_extend = I[i - 1, 1:] - ge
    from_up_I = up_extend > up_open
    up_best = np.where(from_up_I, up_extend, up_open).tolist()
    up_ptr = np.where(from_up_I, Trace.UP_I, Trace.UP_M).tolist()

    # I, left candidates: open from M, extend from I (gap in seq_2)
    m_row = M[i].tolist()
    prev_I = I[i, 0].item()
    i_row = []
    i_ptr = []
    for j in range(1, len(m_row)):
        best, ptr = m_row[j - 1] - go, Trace.LEFT_M
        if prev_I - ge > best:
            best, ptr = prev_I - ge, Trace.LEFT_I
        if up_best[j - 1] > best:
            best, ptr = up_best[j - 1], up_ptr[j - 1]
        i_row.append(best)
        i_ptr.append(ptr)
        prev_I = best

    I[i, 1:] = i_row
    data.I_trace[i, 1:] = i_ptr


def fill_matrices(config: AlignInput, data: AlignmentData) -> None:
    """Fill every interior row, top to bottom."""
    rows, _ = config.shape
    for i in range(1, rows):
        row_update(config, data, i)


# ---------------------------------------------------------------------------
# Endpoint search and traceback
# ---------------------------------------------------------------------------

def find_endpoint(data: AlignmentData) -> Tuple[int, int, int]:
    """
    Locate the best terminal cell under free end gaps.

    The last column is scanned bottom-up and the last row right-to-left,
    M before I at each cell, keeping the latest cell whose score is >=
    the running best.  Both scans start from the free boundary value 0
    (cells (0, L1) and (L2, 0)).  The row maximum is used only when it
    is strictly larger than the column maximum.

    Returns
    -------
    (i, j, state)
        Endpoint cell and the layer the traceback starts in: M when
        M >= I at that cell, else I.
    """
    M, I = data.M, data.I
    rows, cols = data.shape
    n, m = rows - 1, cols - 1

    col_best, col_row = 0, 0
    for i in range(n, 0, -1):
        for layer in (M, I):
            if layer[i, m] >= col_best:
                col_best, col_row = layer[i, m], i

    row_best, row_col = 0, 0
    for j in range(m, 0, -1):
        for layer in (M, I):
            if layer[n, j] >= row_best:
                row_best, row_col = layer[n, j], j

    if row_best > col_best:
        i, j = n, row_col
    else:
        i, j = col_row, m

    state = STATE_M if M[i, j] >= I[i, j] else STATE_I
    return i, j, state


def traceback_alignment(
    config: AlignInput,
    data: AlignmentData,
    endpoint: Tuple[int, int, int],
) -> Tuple[str, str, str, Tuple[int, int], List[Tuple[int, int, int]]]:
    """
    Recover the alignment ending at `endpoint`.

    The unaligned suffix past the endpoint is written first as free gap
    columns, then pointers are followed back to (0, 0).  Everything is
    collected end-to-start and reversed before returning.

    Returns
    -------
    aligned_seq_1, aligned_seq_2 : str
    raw_ops : str
        One of M/I/D per column, start to end.
    start : (row, col)
        First boundary cell reached by the walk.
    path : list of (i, j, state)
    """
    seq_1, seq_2 = config.seq_1, config.seq_2
    rows, cols = config.shape
    i, j, state = endpoint

    aln_1: List[str] = []
    aln_2: List[str] = []
    ops: List[str] = []
    path: List[Tuple[int, int, int]] = []

    # Free trailing overhang (only one of these loops runs)
    for gap_i in range(rows - 1, i, -1):
        aln_1.append(GAP_CHAR)
        aln_2.append(seq_2[gap_i - 1])
        ops.append("D")
    for gap_j in range(cols - 1, j, -1):
        aln_1.append(seq_1[gap_j - 1])
        aln_2.append(GAP_CHAR)
        ops.append("I")

    start = None
    while i > 0 or j > 0:
        if start is None and (i == 0 or j == 0):
            start = (i, j)
        path.append((i, j, state))

        pointer = data.pointer(state, i, j)
        if pointer == Trace.START:
            raise RuntimeError(f"traceback reached START at ({i}, {j}) before the origin")
        di, dj, prev_state = _MOVES[pointer]

        if di and dj:
            aln_1.append(seq_1[j - 1])
            aln_2.append(seq_2[i - 1])
            ops.append("M")
        elif dj:
            aln_1.append(seq_1[j - 1])
            aln_2.append(GAP_CHAR)
            ops.append("I")
        else:
            aln_1.append(GAP_CHAR)
            aln_2.append(seq_2[i - 1])
            ops.append("D")

        i, j, state = i - di, j - dj, prev_state

    aln_1.reverse()
    aln_2.reverse()
    ops.reverse()
    path.reverse()

    return "".join(aln_1), "".join(aln_2), "".join(ops), start or (0, 0), path


# ---------------------------------------------------------------------------
# Top-level driver
# ---------------------------------------------------------------------------

def run_dp(
    seq_1: str,
    seq_2: str,
    scoring: ScoringModel,
    return_data: bool = False,
) -> AlignmentResult:
    """
    Fill, resolve and trace back one alignment of seq_1 against seq_2.

    Parameters
    ----------
    seq_1, seq_2 : str
        Query and reference, uppercase A/C/G/T.
    scoring : ScoringModel
    return_data : bool, default False
        If True, attach the full DP/traceback arrays (AlignmentData).

    Returns
    -------
    AlignmentResult
    """
    config = AlignInput(seq_1=seq_1, seq_2=seq_2, scoring=scoring)
    data = init_matrices(config)
    fill_matrices(config, data)

    endpoint = find_endpoint(data)
    i, j, state = endpoint
    score = data.score(state, i, j).item()

    aln_1, aln_2, raw_ops, start, path = traceback_alignment(config, data, endpoint)
    cigar = Cigar.from_trace(raw_ops)

    logger.debug(
        "aligned %d x %d: end=(%d, %d) state=%s score=%s cigar=%s",
        len(seq_1), len(seq_2), i, j, "MI"[state], score, cigar,
    )

    return AlignmentResult(
        aligned_seq_1=aln_1,
        aligned_seq_2=aln_2,
        score=score,
        cigar=cigar,
        start=start,
        end=(i, j),
        path=path,
        data=data if return_data else None,
    )
