"""
aligners.py — User-facing alignment helpers for strnw

align() is the single synchronous entry point used by the re-alignment
stage: it validates its inputs, runs the DP core and returns an
AlignmentResult.  ReadRealigner binds a scoring model to a table of
extended reference windows so a read can be re-aligned by locus.
"""

from __future__ import annotations

import logging
from typing import Optional

from .default import default_scoring
from .dp_core import AlignmentResult, run_dp
from .scoring import ScoringModel
from .windows import ReferenceWindows

logger = logging.getLogger(__name__)


def align(
    seq_1: str,
    seq_2: str,
    scoring: Optional[ScoringModel] = None,
    return_data: bool = False,
) -> AlignmentResult:
    """
    Semi-global affine-gap alignment of a query against a reference.

    Leading and trailing overhang of either sequence is free; gaps
    inside the aligned region cost gap_open for the first position and
    gap_extend for each further one.

    Parameters
    ----------
    seq_1 : str
        Query (read), uppercase A/C/G/T.
    seq_2 : str
        Reference window, uppercase A/C/G/T.
    scoring : ScoringModel, optional
        Defaults to default_scoring() (+2 / -2, open 6, extend 0).
    return_data : bool, default False
        If True, also return the DP tables (AlignmentData).

    Returns
    -------
    AlignmentResult

    Raises
    ------
    InvalidSymbol
        A sequence contains anything other than A, C, G, T.
    TypeError
        scoring is not a ScoringModel.

    Examples
    --------
    >>> align("ACGT", "ACCT").cigar_string
    '4M'
    """
    if scoring is None:
        scoring = default_scoring()
    elif not isinstance(scoring, ScoringModel):
        raise TypeError(f"scoring must be a ScoringModel, got {type(scoring).__name__}")
    if seq_1 is None or seq_2 is None:
        raise TypeError("sequences must be str, got None")
    return run_dp(seq_1, seq_2, scoring, return_data=return_data)


class ReadRealigner:
    """
    Re-align reads against the extended reference window of their locus.

    Parameters
    ----------
    windows : ReferenceWindows
        Window table built once per run; shared, never modified.
    scoring : ScoringModel, optional
        Defaults to default_scoring().
    """

    def __init__(self, windows: ReferenceWindows, scoring: Optional[ScoringModel] = None):
        if not isinstance(windows, ReferenceWindows):
            windows = ReferenceWindows(windows)
        self.windows = windows
        self.scoring = scoring if scoring is not None else default_scoring()

    def window(self, chrom: str, pos: int) -> str:
        try:
            return self.windows[chrom, pos]
        except KeyError:
            logger.debug("no reference window for %s:%s", chrom, pos)
            raise

    def realign(self, read: str, chrom: str, pos: int, return_data: bool = False) -> AlignmentResult:
        """Align `read` (query) against the window stored for (chrom, pos)."""
        return align(read, self.window(chrom, pos), self.scoring, return_data=return_data)
