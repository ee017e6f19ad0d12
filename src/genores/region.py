"""
BED regions: the unit of genomic range output
"""
from typing import Iterable, List, Sequence

import pandas as pd

from .annotate.base import ReferenceName
from .interval import Interval
from .util import unique_in_order

BED_COLUMNS = ['chr', 'start', 'end', 'name']
ANNOTATION_DELIM = ','


class BedRegion(Interval):
    """
    a zero-based half-open genomic region with annotations. Regions are never modified after creation
    """

    def __init__(self, chr: str, start: int, end: int, annotations: Sequence[str] = ()):
        """
        Args:
            chr: the chromosome label
            start: the start position (0-based, inclusive)
            end: the end position (exclusive)
            annotations: ordered annotation strings (i.e. gene names)

        Example:
            >>> BedRegion('chr1', 20, 50, ['FOO'])
        """
        Interval.__init__(self, start, end)
        self.chr = ReferenceName(chr)
        self.annotations = tuple(annotations)

    def with_annotations(self, *annotations: str) -> 'BedRegion':
        """
        create a copy of this region with additional annotations
        """
        return BedRegion(self.chr, self.start, self.end, self.annotations + annotations)

    def sort_key(self):
        return (self.chr.sort_key(), self.start, self.end, self.annotations)

    def key(self):
        return (str(self.chr), self.start, self.end, self.annotations)

    def __eq__(self, other):
        if not hasattr(other, 'key') or not callable(other.key):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __lt__(self, other):
        return self.sort_key() < other.sort_key()

    def to_bed_line(self) -> str:
        """
        Example:
            >>> BedRegion('chr1', 20, 50, ['FOO', 'BAR']).to_bed_line()
            'chr1\\t20\\t50\\tFOO,BAR'
        """
        return '\t'.join(
            [str(self.chr), str(self.start), str(self.end), ANNOTATION_DELIM.join(self.annotations)]
        )

    def __str__(self):
        return '{}:{}-{}'.format(self.chr, self.start, self.end)

    def __repr__(self):
        return 'BedRegion({}:{}-{}, annotations={})'.format(
            self.chr, self.start, self.end, list(self.annotations)
        )


def sort_regions(regions: Iterable[BedRegion]) -> List[BedRegion]:
    """
    sort regions by chromosome and then position
    """
    return sorted(regions, key=lambda r: r.sort_key())


def merge_regions(regions: Iterable[BedRegion]) -> List[BedRegion]:
    """
    combine overlapping or adjacent regions on the same chromosome. The annotations of
    merged regions are united, keeping the order they were first seen in

    Returns:
        regions sorted by chromosome and start, none of which overlap

    Example:
        >>> merge_regions([BedRegion('chr1', 5, 10, ['A']), BedRegion('chr1', 10, 20, ['B'])])
        [BedRegion(chr1:5-20, annotations=['A', 'B'])]
    """
    merged: List[BedRegion] = []
    for region in sort_regions(regions):
        if merged and merged[-1].chr == region.chr and Interval.touches(merged[-1], region):
            last = merged[-1]
            merged[-1] = BedRegion(
                last.chr,
                last.start,
                max(last.end, region.end),
                unique_in_order(last.annotations + region.annotations),
            )
        else:
            merged.append(region)
    return merged


def base_count(regions: Iterable[BedRegion]) -> int:
    """
    the number of bases covered, counting overlapping regions once
    """
    return sum([len(r) for r in merge_regions(regions)])


def read_bed(filepath: str) -> List[BedRegion]:
    """
    reads a BED file. The 4th column, if present, is split into the region annotations

    .. code-block:: text

        chr1    20  50  FOO
        chr1    60  90  FOO,BAR
    """
    try:
        df = pd.read_csv(
            filepath,
            sep='\t',
            header=None,
            comment='#',
            dtype={0: str, 1: int, 2: int},
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        return []
    if df.shape[1] < 3:
        raise KeyError(f'BED file requires at least 3 columns ({filepath})')
    regions = []
    for row in df.itertuples(index=False):
        annotations = []
        if len(row) > 3 and str(row[3]):
            annotations = str(row[3]).split(ANNOTATION_DELIM)
        regions.append(BedRegion(row[0], row[1], row[2], annotations))
    return regions


def write_bed(regions: Iterable[BedRegion], filepath: str) -> None:
    """
    write regions as a headerless tab-delimited BED file
    """
    df = pd.DataFrame(
        [
            [str(r.chr), r.start, r.end, ANNOTATION_DELIM.join(r.annotations)]
            for r in regions
        ],
        columns=BED_COLUMNS,
    )
    df.to_csv(filepath, sep='\t', header=False, index=False)
