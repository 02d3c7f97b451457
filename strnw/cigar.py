"""
cigar.py — Run-length CIGAR descriptions of an alignment

The traceback emits one operation per alignment column:

    M : match / mismatch          (consumes query and reference)
    I : insertion, gap in seq_2   (consumes query only)
    D : deletion,  gap in seq_1   (consumes reference only)

rle_ops() collapses that raw trace into maximal runs, write_cigar()
renders the canonical string ("12M1I5M") and parse_cigar() reads it back.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

CIGAR_OPS = "MID"
QUERY_CONSUMING = frozenset("MI")
REFERENCE_CONSUMING = frozenset("MD")

_CIGAR_TOKEN = re.compile(r"(\d+)([A-Za-z=])")

CigarRun = Tuple[int, str]


def rle_ops(raw: str) -> List[CigarRun]:
    """
    Run-length encode a raw per-column operation trace.

    >>> rle_ops("MMIIIDDDMM")
    [(2, 'M'), (3, 'I'), (3, 'D'), (2, 'M')]
    """
    runs: List[CigarRun] = []
    for op in raw:
        if op not in CIGAR_OPS:
            raise ValueError(f"Unknown CIGAR operation {op!r} in trace {raw!r}")
        if runs and runs[-1][1] == op:
            runs[-1] = (runs[-1][0] + 1, op)
        else:
            runs.append((1, op))
    return runs


def write_cigar(ops: Iterable[CigarRun]) -> str:
    """Render runs as a canonical CIGAR string; empty runs give ''."""
    return "".join(f"{length}{op}" for length, op in ops)


def parse_cigar(text: str) -> List[CigarRun]:
    """
    Parse a CIGAR string into [(length, op), ...].

    Raises ValueError when the text is not a sequence of <int><op>
    tokens or uses an operation other than M, I or D.
    """
    runs: List[CigarRun] = []
    pos = 0
    for token in _CIGAR_TOKEN.finditer(text):
        if token.start() != pos:
            raise ValueError(f"Malformed CIGAR {text!r} at position {pos}")
        length, op = int(token.group(1)), token.group(2)
        if op not in CIGAR_OPS:
            raise ValueError(f"Unsupported CIGAR operation {op!r} in {text!r}")
        if length == 0:
            raise ValueError(f"Zero-length CIGAR run in {text!r}")
        runs.append((length, op))
        pos = token.end()
    if pos != len(text):
        raise ValueError(f"Malformed CIGAR {text!r} at position {pos}")
    return runs


def op_length_total(ops: Iterable[CigarRun], consumes: Optional[str] = None) -> int:
    """
    Sum of run lengths.

    consumes=None counts every column, "query" only M/I runs and
    "reference" only M/D runs.
    """
    if consumes is None:
        wanted = frozenset(CIGAR_OPS)
    elif consumes == "query":
        wanted = QUERY_CONSUMING
    elif consumes == "reference":
        wanted = REFERENCE_CONSUMING
    else:
        raise ValueError(f"consumes must be None, 'query' or 'reference', got {consumes!r}")
    return sum(length for length, op in ops if op in wanted)


@dataclass(frozen=True)
class Cigar:
    """
    Ordered run-length edit description of one alignment.

    Attributes
    ----------
    ops : tuple of (int, str)
        Maximal runs, adjacent runs never share an operation.
    """

    ops: Tuple[CigarRun, ...] = ()

    @classmethod
    def from_trace(cls, raw: str) -> "Cigar":
        """Compress a raw per-column trace ("MMMIMM") into runs."""
        return cls(tuple(rle_ops(raw)))

    @classmethod
    def from_string(cls, text: str) -> "Cigar":
        runs = parse_cigar(text)
        # re-run the compressor so "2M3M" becomes "5M"
        return cls.from_trace("".join(op * length for length, op in runs))

    @property
    def string(self) -> str:
        return write_cigar(self.ops)

    @property
    def query_length(self) -> int:
        return op_length_total(self.ops, consumes="query")

    @property
    def reference_length(self) -> int:
        return op_length_total(self.ops, consumes="reference")

    def expand(self) -> str:
        """Inverse of from_trace: one operation letter per column."""
        return "".join(op * length for length, op in self.ops)

    def __len__(self) -> int:
        return op_length_total(self.ops)

    def __iter__(self):
        return iter(self.ops)

    def __str__(self) -> str:
        return self.string
