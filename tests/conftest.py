"""
conftest.py — Shared pytest fixtures for the strnw test suite

Provides common scoring models, the DNA alphabet and seeded random
number generators used across all test modules.
"""

import pytest
import numpy as np
from numpy.typing import NDArray

from strnw import ScoringModel


# ---------------------------------------------------------------------------
# Default scoring fixtures (match default.py)
# ---------------------------------------------------------------------------

@pytest.fixture
def default_bases() -> NDArray:
    """Default DNA alphabet."""
    return np.array(["A", "C", "G", "T"])


@pytest.fixture
def scoring_params() -> dict:
    """Genotyper defaults: +2/-2, open 6, extend 0."""
    return {
        "match_score": 2,
        "mismatch_score": -2,
        "gap_open": 6,
        "gap_extend": 0,
    }


@pytest.fixture
def scoring(scoring_params) -> ScoringModel:
    return ScoringModel(**scoring_params)


@pytest.fixture
def indel_scoring() -> ScoringModel:
    """Large match reward so short internal gaps are worth opening."""
    return ScoringModel(match_score=5, mismatch_score=-5, gap_open=6, gap_extend=1)


# ---------------------------------------------------------------------------
# Random number generator fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(888)


@pytest.fixture
def rng_alt():
    """Alternative seed for diversity in randomized tests."""
    return np.random.default_rng(123)


# ---------------------------------------------------------------------------
# Sequence generation helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def random_dna_factory(default_bases):
    """Factory fixture returning a function to generate random DNA strings."""
    def _random_dna(length: int, rng: np.random.Generator) -> str:
        return "".join(rng.choice(default_bases, size=length))
    return _random_dna
