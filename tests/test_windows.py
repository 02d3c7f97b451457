"""
test_windows.py — Reference window table and read re-alignment
"""

import pytest

from strnw import InvalidSymbol, ReadRealigner, ReferenceWindows, ScoringModel

WINDOW = "ccccc" + "GATTACA" + "ccccc"


@pytest.fixture
def windows():
    return ReferenceWindows({
        ("chr1", 1000): WINDOW,
        ("chr1", 2000): "ACGTCAGGTGCATG",
        ("chr2", 500): "CAGCAGCAGCAG",
    })


class TestReferenceWindows:

    def test_lookup_uppercases(self, windows):
        assert windows["chr1", 1000] == WINDOW.upper()

    def test_mapping_protocol(self, windows):
        assert len(windows) == 3
        assert ("chr2", 500) in windows
        assert ("chr2", 501) not in windows
        assert set(windows) == {("chr1", 1000), ("chr1", 2000), ("chr2", 500)}
        assert windows.get(("chrX", 1)) is None

    def test_chromosomes(self, windows):
        assert windows.chromosomes() == ["chr1", "chr2"]

    def test_missing_window(self, windows):
        with pytest.raises(KeyError):
            windows["chr3", 1]

    def test_read_only(self, windows):
        with pytest.raises(TypeError):
            windows["chr1", 1000] = "ACGT"

    def test_from_pairs(self):
        table = ReferenceWindows([(("chr1", "10"), "acgt")])
        assert table["chr1", 10] == "ACGT"
        assert table["chr1", "10"] == "ACGT"
        assert ("chr1", "10") in table

    def test_unparseable_key_is_missing(self, windows):
        assert ("chr1", "pos") not in windows
        assert "chr1" not in windows
        with pytest.raises(KeyError):
            windows["chr1", None]

    def test_source_not_shared(self):
        source = {("chr1", 1): "ACGT"}
        table = ReferenceWindows(source)
        source[("chr1", 1)] = "TTTT"
        assert table["chr1", 1] == "ACGT"

    def test_invalid_window(self):
        with pytest.raises(InvalidSymbol) as excinfo:
            ReferenceWindows({("chr1", 5): "ACGNT"})
        assert excinfo.value.position == 3
        assert "chr1:5" in excinfo.value.sequence_name

    def test_empty(self):
        assert len(ReferenceWindows()) == 0


class TestReadRealigner:

    def test_realign_padded_window(self, windows, scoring):
        realigner = ReadRealigner(windows, scoring)
        result = realigner.realign("GATTACA", "chr1", 1000)
        assert result.score == 14
        assert result.cigar_string == "5D7M5D"

    def test_realign_deletion(self, windows):
        realigner = ReadRealigner(
            windows, ScoringModel(match_score=5, mismatch_score=-5, gap_open=6, gap_extend=1)
        )
        result = realigner.realign("ACGTCATGCATG", "chr1", 2000)
        assert result.cigar_string == "6M2D6M"

    def test_default_scoring(self, windows):
        assert ReadRealigner(windows).realign("GATTACA", "chr1", 1000).score == 14

    def test_accepts_plain_mapping(self):
        realigner = ReadRealigner({("chr1", 1): "ACGT"})
        assert isinstance(realigner.windows, ReferenceWindows)
        assert realigner.realign("ACGT", "chr1", 1).cigar_string == "4M"

    def test_missing_window(self, windows):
        with pytest.raises(KeyError):
            ReadRealigner(windows).realign("ACGT", "chr9", 1)

    def test_invalid_read(self, windows):
        with pytest.raises(InvalidSymbol):
            ReadRealigner(windows).realign("GATNACA", "chr1", 1000)

    def test_return_data(self, windows):
        result = ReadRealigner(windows).realign("CAGCAG", "chr2", 500, return_data=True)
        assert result.data.M.shape == (13, 7)
