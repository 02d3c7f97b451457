"""
strnw: semi-global affine-gap alignment for STR read re-alignment.
"""

# =============================================================================
# CORE ALIGNMENT
# =============================================================================

from .aligners import (
    align,
    ReadRealigner,
)

from .dp_core import (
    AlignInput,
    AlignmentData,
    AlignmentResult,
    Trace,
    run_dp,
)

from .scoring import ScoringModel

from .cigar import (
    Cigar,
    rle_ops,
    parse_cigar,
    write_cigar,
    op_length_total,
)

from .windows import ReferenceWindows

from .errors import (
    AlignmentError,
    InvalidSymbol,
    InvalidScoringModel,
)

from .default import align_params, default_scoring


# =============================================================================
# VALIDATION AND TESTING
# =============================================================================

from .validation import (
    semiglobal_score,
    check_engine_vs_baseline,
    check_alignment_validity,
)


# =============================================================================
# PLOTTING (requires both matplotlib and seaborn -- install with pip install strnw[plot])
# =============================================================================
def _missing_plot_dep(func_name: str) -> ImportError:
    return ImportError(
        f"{func_name} requires plotting dependencies.\n"
        'Install with: pip install "strnw[plot]"'
    )

try:
    from .plot import plot_alignment_matrices
    PLOT_AVAILABLE = True
except ImportError:
    # Raises ImportError if accessed without matplotlib/seaborn
    def plot_alignment_matrices(*args, **kwargs):
        raise _missing_plot_dep("plot_alignment_matrices")
    PLOT_AVAILABLE = False


__all__ = [
    # Core alignment
    "align",
    "ReadRealigner",
    "AlignInput",
    "AlignmentData",
    "AlignmentResult",
    "Trace",
    "run_dp",
    # Scoring
    "ScoringModel",
    "align_params",
    "default_scoring",
    # CIGAR
    "Cigar",
    "rle_ops",
    "parse_cigar",
    "write_cigar",
    "op_length_total",
    # Reference windows
    "ReferenceWindows",
    # Errors
    "AlignmentError",
    "InvalidSymbol",
    "InvalidScoringModel",
    # Validation
    "semiglobal_score",
    "check_engine_vs_baseline",
    "check_alignment_validity",
    # Plotting
    "PLOT_AVAILABLE",
    "plot_alignment_matrices",
]
