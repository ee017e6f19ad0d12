import pytest

from genores.constants import OVERLAP_MODE
from genores.error import InvalidArgumentError
from genores.index import GeneOverlapIndex, IntervalIndex


@pytest.fixture
def index():
    return IntervalIndex(
        [
            ('chr1', 100, 200, 'A'),
            ('1', 150, 160, 'B'),
            ('1', 0, 1000, 'C'),
            ('1', 300, 400, 'D'),
            ('2', 100, 200, 'E'),
            ('X', 5, 10, 'F'),
        ]
    )


class TestIntervalIndex:
    def test_len(self, index):
        assert len(index) == 6
        assert [c.standard() for c in index.chromosomes()] == ['1', '2', 'X']

    def test_query(self, index):
        assert index.query('1', 155, 170) == ['C', 'A', 'B']
        assert index.query('1', 250, 300) == ['C']
        assert index.query('1', 1000, 1200) == []

    def test_query_half_open(self, index):
        assert index.query('2', 200, 300) == []
        assert index.query('2', 0, 100) == []
        assert index.query('2', 199, 200) == ['E']

    def test_long_interval_found_after_short_ones(self, index):
        # C starts first but ends after every other interval
        assert index.query('1', 500, 600) == ['C']

    def test_chromosome_prefix_insensitive(self, index):
        assert index.query('chr2', 150, 151) == ['E']
        assert index.query('2', 150, 151) == ['E']

    def test_unknown_chromosome(self, index):
        assert index.query('3', 0, 100) == []

    def test_empty_query(self, index):
        assert index.query('1', 150, 150) == []

    def test_single_interval_chromosome(self, index):
        assert index.query('X', 0, 6) == ['F']
        assert index.query('X', 10, 20) == []

    def test_invalid_interval(self):
        with pytest.raises(AttributeError):
            IntervalIndex([('1', 10, 5, 'bad')])

    def test_empty_index(self):
        index = IntervalIndex([])
        assert len(index) == 0
        assert index.query('1', 0, 100) == []

    def test_matches_brute_force(self, index):
        records = [(100, 200, 'A'), (150, 160, 'B'), (0, 1000, 'C'), (300, 400, 'D')]
        for start in range(0, 1100, 50):
            for end in range(start + 1, 1150, 75):
                expected = {label for s, e, label in records if s < end and start < e}
                assert set(index.query('1', start, end)) == expected


class TestGeneOverlapIndex:
    def test_transcript_span(self, store):
        index = GeneOverlapIndex.build(store, OVERLAP_MODE.TRANSCRIPT)
        assert index.query('2', 1000, 2000) == {'BAZ1', 'NEAR'}

    def test_by_exon(self, store):
        index = GeneOverlapIndex.build(store, OVERLAP_MODE.EXON)
        assert index.query('2', 1000, 2000) == {'BAZ1', 'NEAR'}
        assert index.query('2', 1001, 1399) == set()
        assert index.query('2', 1911, 1939) == set()

    def test_extend(self, store):
        index = GeneOverlapIndex.build(store, OVERLAP_MODE.EXON)
        assert index.query('2', 1001, 1399, extend=1) == set()
        assert index.query('2', 1001, 1399, extend=2) == {'BAZ1'}

    def test_end_is_exclusive(self, store):
        index = GeneOverlapIndex.build(store)
        assert index.query('chr2', 2500, 2600) == set()
        assert index.query('chr2', 2499, 2600) == {'BAZ2'}

    def test_invalid_mode(self, store):
        with pytest.raises(InvalidArgumentError):
            GeneOverlapIndex.build(store, 'gene')

    def test_cached(self, store):
        first = GeneOverlapIndex.cached(store)
        assert GeneOverlapIndex.cached(store) is first
        assert GeneOverlapIndex.cached(store, OVERLAP_MODE.EXON) is not first
