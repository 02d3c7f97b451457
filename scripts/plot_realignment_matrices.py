#!/usr/bin/env python3
"""
plot_realignment_matrices.py — M / I heatmaps for one read re-alignment

Aligns a read against a padded reference window and writes the two DP
score layers with the traceback path overlaid.

Output (default):
  figures/realignment_matrices.pdf
"""

import argparse
import sys
from pathlib import Path

# Use Agg backend by default for headless generation
import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from strnw.aligners import align
from strnw.plot import plot_alignment_matrices
from strnw.scoring import ScoringModel


# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_READ = "CAGCAGCAGTT"
DEFAULT_WINDOW = "GGACAGCAGCAGCAGTTGC"

FIGURE = {
    'dpi': 300,
    'format': 'pdf',
}


# =============================================================================
# CLI
# =============================================================================

def main():
    parser = argparse.ArgumentParser(description='Plot DP matrices for a read re-alignment')
    parser.add_argument('--read', type=str, default=DEFAULT_READ,
                        help=f'Read (query) sequence (default: {DEFAULT_READ})')
    parser.add_argument('--window', type=str, default=DEFAULT_WINDOW,
                        help=f'Reference window (default: {DEFAULT_WINDOW})')
    parser.add_argument('--gap-open', type=float, default=6,
                        help='Gap open penalty magnitude (default: 6)')
    parser.add_argument('--gap-extend', type=float, default=0,
                        help='Gap extend penalty magnitude (default: 0)')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='Output file path (default: figures/realignment_matrices.pdf)')
    parser.add_argument('--dpi', type=int, default=FIGURE['dpi'],
                        help='Resolution in DPI (default: 300)')
    parser.add_argument('--format', '-f', type=str, default=FIGURE['format'],
                        choices=['pdf', 'png', 'svg', 'eps'],
                        help='Output format (default: pdf)')
    parser.add_argument('--show', action='store_true',
                        help='Display figure interactively')
    args = parser.parse_args()

    scoring = ScoringModel.from_params(gap_open=args.gap_open, gap_extend=args.gap_extend)
    result = align(args.read, args.window, scoring, return_data=True)
    print(f"score={result.score} cigar={result.cigar_string}")
    print(result.aligned_seq_1)
    print(result.aligned_seq_2)

    output_path = (
        Path(args.output) if args.output
        else Path(__file__).parent.parent / 'figures' / f"realignment_matrices.{args.format}"
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig = plot_alignment_matrices(result, args.read, args.window)
    fig.savefig(output_path, dpi=args.dpi, format=args.format, bbox_inches='tight')
    print(f"Saved realignment matrices to: {output_path}")

    if args.show:
        plt.show()


if __name__ == '__main__':
    main()
