import pytest

from genores.annotate.base import ReferenceName
from genores.region import BedRegion, base_count, merge_regions, read_bed, sort_regions, write_bed


class TestReferenceName:
    def test_prefix_insensitive_equality(self):
        assert ReferenceName('chr1') == ReferenceName('1')
        assert ReferenceName('1') == 'chr1'
        assert ReferenceName('chr1') != ReferenceName('chr2')
        assert len({ReferenceName('chr1'), ReferenceName('1')}) == 1

    def test_standard_and_prefixed(self):
        assert ReferenceName('chrX').standard() == 'X'
        assert ReferenceName('X').prefixed() == 'chrX'
        assert ReferenceName('chr2').prefixed() == 'chr2'

    def test_sort_order(self):
        names = [ReferenceName(n) for n in ['chrY', '10', 'chrUn_gl000220', 'chr2', 'MT', 'X', '1']]
        assert [n.standard() for n in sorted(names)] == ['1', '2', '10', 'X', 'Y', 'MT', 'Un_gl000220']

    def test_comparisons(self):
        assert ReferenceName('2') < ReferenceName('chr10')
        assert ReferenceName('chr10') > '2'
        assert ReferenceName('chr1') <= '1'
        assert ReferenceName('chr1') >= '1'


class TestBedRegion:
    def test_init(self):
        region = BedRegion('chr1', 20, 50, ['FOO'])
        assert region.chr == '1'
        assert region.annotations == ('FOO',)
        assert len(region) == 30
        with pytest.raises(AttributeError):
            BedRegion('chr1', 50, 20)

    def test_with_annotations_does_not_modify(self):
        region = BedRegion('chr1', 20, 50, ['FOO'])
        new_region = region.with_annotations('BAR')
        assert new_region.annotations == ('FOO', 'BAR')
        assert region.annotations == ('FOO',)

    def test_to_bed_line(self):
        assert BedRegion('chr1', 20, 50, ['FOO', 'BAR']).to_bed_line() == 'chr1\t20\t50\tFOO,BAR'
        assert BedRegion('chr1', 20, 50).to_bed_line() == 'chr1\t20\t50\t'

    def test_str(self):
        assert str(BedRegion('chr1', 20, 50)) == 'chr1:20-50'

    def test_eq(self):
        assert BedRegion('chr1', 20, 50, ['FOO']) == BedRegion('chr1', 20, 50, ['FOO'])
        assert BedRegion('chr1', 20, 50, ['FOO']) != BedRegion('chr1', 20, 50, ['BAR'])
        assert BedRegion('chr1', 20, 50) != (20, 50)


class TestSortRegions:
    def test_by_chromosome_then_start(self):
        regions = [
            BedRegion('chrX', 1, 2),
            BedRegion('chr10', 5, 6),
            BedRegion('chr2', 9, 10),
            BedRegion('chr2', 3, 4),
        ]
        assert [str(r) for r in sort_regions(regions)] == [
            'chr2:3-4',
            'chr2:9-10',
            'chr10:5-6',
            'chrX:1-2',
        ]


class TestMergeRegions:
    def test_overlapping(self):
        result = merge_regions([BedRegion('chr1', 5, 15, ['A']), BedRegion('chr1', 10, 20, ['B'])])
        assert result == [BedRegion('chr1', 5, 20, ['A', 'B'])]

    def test_adjacent(self):
        result = merge_regions([BedRegion('chr1', 10, 20, ['B']), BedRegion('chr1', 5, 10, ['A'])])
        assert result == [BedRegion('chr1', 5, 20, ['A', 'B'])]

    def test_separate(self):
        regions = [BedRegion('chr1', 60, 90, ['FOO']), BedRegion('chr1', 20, 50, ['FOO'])]
        assert merge_regions(regions) == [
            BedRegion('chr1', 20, 50, ['FOO']),
            BedRegion('chr1', 60, 90, ['FOO']),
        ]

    def test_duplicate_annotations_united(self):
        result = merge_regions([BedRegion('chr1', 5, 15, ['A']), BedRegion('chr1', 8, 12, ['A'])])
        assert result == [BedRegion('chr1', 5, 15, ['A'])]

    def test_different_chromosomes_not_merged(self):
        result = merge_regions([BedRegion('chr1', 5, 15), BedRegion('chr2', 5, 15)])
        assert len(result) == 2

    def test_no_overlap_after_merge(self):
        regions = [BedRegion('chr1', s, s + 7) for s in [0, 3, 20, 26, 40, 100, 101]]
        result = merge_regions(regions)
        for prev, curr in zip(result, result[1:]):
            assert prev.start <= curr.start
            assert prev.end < curr.start

    def test_empty(self):
        assert merge_regions([]) == []

    def test_base_count(self):
        assert base_count([BedRegion('chr1', 0, 10), BedRegion('chr1', 5, 15), BedRegion('chr2', 0, 5)]) == 20


class TestBedFiles:
    def test_write_then_read(self, tmp_path):
        filename = str(tmp_path / 'regions.bed')
        regions = [BedRegion('chr1', 20, 50, ['FOO', 'BAR']), BedRegion('chr2', 0, 5)]
        write_bed(regions, filename)
        with open(filename) as fh:
            assert fh.read() == 'chr1\t20\t50\tFOO,BAR\nchr2\t0\t5\t\n'
        assert read_bed(filename) == regions

    def test_read_three_columns_with_comments(self, tmp_path):
        filename = tmp_path / 'regions.bed'
        filename.write_text('# comment\nchr1\t20\t50\n1\t60\t90\n')
        assert read_bed(str(filename)) == [BedRegion('chr1', 20, 50), BedRegion('1', 60, 90)]

    def test_read_empty(self, tmp_path):
        filename = tmp_path / 'regions.bed'
        filename.write_text('')
        assert read_bed(str(filename)) == []
