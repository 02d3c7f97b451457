"""
test_scoring.py — ScoringModel construction, validation and encoding
"""

import numpy as np
import pytest

from strnw import ScoringModel, InvalidScoringModel, InvalidSymbol, default_scoring
from strnw import default


class TestScoringModel:

    def test_table_is_symmetric(self, scoring):
        table = scoring.score_table
        assert table.shape == (4, 4)
        assert np.array_equal(table, table.T)
        assert np.all(np.diag(table) == 2)
        assert table[0, 1] == -2

    def test_table_is_read_only(self, scoring):
        with pytest.raises(ValueError):
            scoring.score_table[0, 0] = 100

    def test_substitution(self, scoring):
        assert scoring.substitution("A", "A") == 2
        assert scoring.substitution("A", "G") == -2
        assert scoring.substitution("G", "A") == scoring.substitution("A", "G")

    def test_gap_penalty(self):
        model = ScoringModel(match_score=1, mismatch_score=-1, gap_open=4, gap_extend=1)
        assert model.gap_penalty(extend=False) == 4
        assert model.gap_penalty(extend=True) == 1

    def test_defaults(self):
        model = default_scoring()
        assert (model.match_score, model.mismatch_score) == (default.MATCH_SCORE, default.MISMATCH_SCORE)
        assert (model.gap_open, model.gap_extend) == (6, 0)

    def test_from_params_overrides(self):
        model = ScoringModel.from_params(gap_extend=0.1)
        assert model.gap_open == 6
        assert model.gap_extend == 0.1

    def test_from_params_rejects_unknown(self):
        with pytest.raises(TypeError):
            ScoringModel.from_params(gap=3)

    def test_integral_models_use_int_matrices(self, scoring):
        assert scoring.is_integral
        assert scoring.dtype == np.int64

    def test_fractional_extend_is_kept(self):
        model = ScoringModel(match_score=2, mismatch_score=-2, gap_open=6, gap_extend=0.1)
        assert model.gap_extend == 0.1
        assert not model.is_integral
        assert model.dtype == np.float64

    def test_models_compare_by_value(self, scoring, scoring_params):
        assert scoring == ScoringModel(**scoring_params)
        assert hash(scoring) == hash(ScoringModel(**scoring_params))


class TestScoringValidation:

    INVALID = [
        # (kwargs, offending field)
        (dict(match_score=2, mismatch_score=-2, gap_open=1, gap_extend=2), "gap_open"),
        (dict(match_score=2, mismatch_score=-2, gap_open=6, gap_extend=-1), "gap_extend"),
        (dict(match_score=2, mismatch_score=-2, gap_open=-6, gap_extend=0), "gap_open"),
        (dict(match_score=-2, mismatch_score=2, gap_open=6, gap_extend=0), "match_score"),
        (dict(match_score=2, mismatch_score=2, gap_open=6, gap_extend=0), "match_score"),
        (dict(match_score=2, mismatch_score=-2, gap_open=float("nan"), gap_extend=0), "gap_open"),
        (dict(match_score=2, mismatch_score=-2, gap_open="6", gap_extend=0), "gap_open"),
        (dict(match_score=10**20, mismatch_score=0, gap_open=6, gap_extend=0), "match_score"),
        (dict(match_score=2, mismatch_score=-2, gap_open=2**63, gap_extend=0), "gap_open"),
    ]

    @pytest.mark.parametrize("kwargs,field", INVALID)
    def test_invalid_models(self, kwargs, field):
        with pytest.raises(InvalidScoringModel) as excinfo:
            ScoringModel(**kwargs)
        assert excinfo.value.field == field

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            ScoringModel(match_score=2, mismatch_score=-2, gap_open=0, gap_extend=1)

    def test_equal_open_and_extend_allowed(self):
        model = ScoringModel(match_score=2, mismatch_score=-2, gap_open=3, gap_extend=3)
        assert model.gap_open == model.gap_extend


class TestEncode:

    def test_encode(self, scoring):
        assert scoring.encode("ACGT").tolist() == [0, 1, 2, 3]
        assert scoring.encode("").tolist() == []

    @pytest.mark.parametrize("seq,symbol,position", [
        ("ACGN", "N", 3),
        ("acgt", "a", 0),
        ("AC-T", "-", 2),
        ("ACGU", "U", 3),
    ])
    def test_invalid_symbols(self, scoring, seq, symbol, position):
        with pytest.raises(InvalidSymbol) as excinfo:
            scoring.encode(seq, name="seq_1")
        assert excinfo.value.symbol == symbol
        assert excinfo.value.position == position
        assert excinfo.value.sequence_name == "seq_1"

    def test_substitution_rejects_bad_symbol(self, scoring):
        with pytest.raises(InvalidSymbol):
            scoring.substitution("A", "N")
