"""
immutable index of labelled genomic intervals for overlap queries
"""
from typing import Dict, Hashable, Iterable, List, Set, Tuple

import numpy as np

from .annotate.base import ReferenceName
from .cache import CACHE, ProcessCache
from .constants import OVERLAP_MODE, enforce
from .store import AnnotationStore
from .util import logger

LabelledInterval = Tuple[str, int, int, Hashable]


class _ChromosomeIndex:
    """
    intervals of one chromosome sorted by start, with the running maximum of the ends

    Since the running maximum never decreases, the first interval which could reach a
    query start is found by a binary search over it and the last interval which could
    start before the query end by a binary search over the starts
    """

    def __init__(self, records: List[Tuple[int, int, Hashable]]):
        records = sorted(records, key=lambda r: (r[0], r[1]))
        self.starts = np.array([r[0] for r in records], dtype=np.int64)
        self.ends = np.array([r[1] for r in records], dtype=np.int64)
        self.max_ends = np.maximum.accumulate(self.ends) if len(records) else self.ends
        self.labels = [r[2] for r in records]

    def __len__(self):
        return len(self.labels)

    def matching_indices(self, start: int, end: int) -> List[int]:
        if not len(self.labels) or start >= end:
            return []
        first = int(np.searchsorted(self.max_ends, start, side='right'))
        last = int(np.searchsorted(self.starts, end, side='left'))
        if first >= last:
            return []
        window = np.nonzero(self.ends[first:last] > start)[0]
        return [first + int(i) for i in window]


class IntervalIndex:
    """
    Sorted, queryable set of genomic intervals with attached labels. Coordinates are zero-based and
    half-open. The index is built once and never updated; build a new one to reflect new data
    """

    def __init__(self, intervals: Iterable[LabelledInterval]):
        """
        Args:
            intervals: (chromosome, start, end, label) records
        """
        by_chr: Dict[ReferenceName, List[Tuple[int, int, Hashable]]] = {}
        count = 0
        for chrom, start, end, label in intervals:
            if start > end:
                raise AttributeError('interval start > end is not allowed', chrom, start, end, label)
            by_chr.setdefault(ReferenceName(chrom), []).append((int(start), int(end), label))
            count += 1
        self._chromosomes = {chrom: _ChromosomeIndex(records) for chrom, records in by_chr.items()}
        self._count = count

    def __len__(self):
        return self._count

    def chromosomes(self) -> List[ReferenceName]:
        return sorted(self._chromosomes)

    def query(self, chromosome: str, start: int, end: int) -> List[Hashable]:
        """
        the labels of every interval intersecting [start, end) on the chromosome, ordered by interval start.
        Chromosome names are compared with or without the chr prefix
        """
        index = self._chromosomes.get(ReferenceName(chromosome))
        if index is None:
            return []
        return [index.labels[i] for i in index.matching_indices(start, end)]

    def __repr__(self):
        return '{}(chromosomes={}, intervals={})'.format(
            self.__class__.__name__, len(self._chromosomes), self._count
        )


class GeneOverlapIndex:
    """
    index of the genes of the store by transcript span or by exon
    """

    def __init__(self, index: IntervalIndex, by: str):
        self.index = index
        self.by = by

    @classmethod
    def build(cls, store: AnnotationStore, by: str = OVERLAP_MODE.TRANSCRIPT) -> 'GeneOverlapIndex':
        """
        build the index from a snapshot of all transcripts of the store

        Args:
            store: the reference store
            by (OVERLAP_MODE): index one interval per transcript span or one per (distinct) exon

        Raises:
            InvalidArgumentError: the overlap mode is not recognized
        """
        enforce(OVERLAP_MODE, by)
        intervals = set()
        for symbol, transcript in store.transcript_snapshot():
            chrom = transcript.chr.standard()
            if by == OVERLAP_MODE.TRANSCRIPT:
                intervals.add((chrom, transcript.start, transcript.end, symbol))
            else:
                for exon in transcript.exons:
                    intervals.add((chrom, exon.start, exon.end, symbol))
        logger.info(f'indexed {len(intervals)} gene intervals by {by}')
        return cls(IntervalIndex(sorted(intervals)), by)

    @classmethod
    def cached(
        cls, store: AnnotationStore, by: str = OVERLAP_MODE.TRANSCRIPT, cache: ProcessCache = CACHE
    ) -> 'GeneOverlapIndex':
        """
        the index for the store, built on first use and shared for the rest of the process
        """
        enforce(OVERLAP_MODE, by)
        return cache.get((store.key, 'gene_overlap_index', by), lambda: cls.build(store, by))

    def query(self, chromosome: str, start: int, end: int, extend: int = 0) -> Set[str]:
        """
        the symbols of genes with an indexed interval intersecting [start - extend, end + extend)
        """
        return set(self.index.query(chromosome, start - extend, end + extend))
