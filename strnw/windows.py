"""
windows.py — Immutable lookup of extended reference windows

The read-processing pipeline cuts one padded reference window around
every STR locus.  ReferenceWindows stores those windows keyed by
(chromosome, position), is built once per run and is read-only
afterwards, so a single instance can be shared by every worker.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterable, Iterator, Tuple, Union

from .default import ALPHABET_TO_INDEX
from .errors import InvalidSymbol

WindowKey = Tuple[str, int]


def _normalise_window(key: WindowKey, seq: str) -> str:
    seq = seq.upper()
    for pos, ch in enumerate(seq):
        if ch not in ALPHABET_TO_INDEX:
            raise InvalidSymbol(ch, pos, f"reference window {key[0]}:{key[1]}")
    return seq


class ReferenceWindows(Mapping):
    """
    Read-only mapping (chrom, pos) -> uppercase window sequence.

    Parameters
    ----------
    windows : mapping or iterable of ((chrom, pos), seq)
        Source windows.  Sequences are uppercased (soft-masked reference
        is common) and must then be pure A/C/G/T.

    Examples
    --------
    >>> windows = ReferenceWindows({("chr1", 100): "acgtACGT"})
    >>> windows["chr1", 100]
    'ACGTACGT'
    """

    __slots__ = ("_windows",)

    def __init__(self, windows: Union[Mapping, Iterable[Tuple[WindowKey, str]]] = ()):
        items = windows.items() if isinstance(windows, Mapping) else windows
        table = {}
        for (chrom, pos), seq in items:
            key = (str(chrom), int(pos))
            table[key] = _normalise_window(key, seq)
        self._windows = MappingProxyType(table)

    def __getitem__(self, key: WindowKey) -> str:
        try:
            chrom, pos = key
            lookup = (str(chrom), int(pos))
        except (TypeError, ValueError):
            raise KeyError(key) from None
        return self._windows[lookup]

    def __iter__(self) -> Iterator[WindowKey]:
        return iter(self._windows)

    def __len__(self) -> int:
        return len(self._windows)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} windows)"

    def chromosomes(self) -> list:
        """Sorted chromosome names with at least one window."""
        return sorted({chrom for chrom, _ in self._windows})
