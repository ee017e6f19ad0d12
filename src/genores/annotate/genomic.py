from typing import Dict, Iterable, List, Optional

from ..constants import STRAND, TRANSCRIPT_SOURCE, enforce
from ..interval import Interval
from .base import ReferenceName


class GeneRecord:
    """
    an approved gene as it is stored in the reference database
    """

    def __init__(self, gene_id: int, symbol: str):
        """
        Args:
            gene_id: the internal numeric identifier of the gene
            symbol: the approved (canonical) gene symbol

        Example:
            >>> GeneRecord(1, 'BRCA2')
        """
        self.id = int(gene_id)
        self.symbol = str(symbol)

    def key(self):
        return (self.id, self.symbol)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return 'GeneRecord({}, {})'.format(self.id, self.symbol)


class Exon(Interval):
    def __init__(self, start: int, end: int, name: Optional[str] = None):
        """
        Args:
            start: the genomic start position (0-based, inclusive)
            end: the genomic end position (exclusive)
            name: the name of the exon

        Example:
            >>> Exon(15, 78)
        """
        Interval.__init__(self, start, end)
        self.name = name

    def __repr__(self):
        return 'Exon({}, {}, name={})'.format(self.start, self.end, self.name)


class Transcript:
    """
    a single exon/coding structure of a gene from one annotation source
    """

    def __init__(
        self,
        transcript_id: int,
        gene_id: int,
        name: str,
        chr: str,
        exons: Iterable,
        source: str = TRANSCRIPT_SOURCE.ENSEMBL,
        strand: str = STRAND.NS,
        coding_start: Optional[int] = None,
        coding_end: Optional[int] = None,
    ):
        """
        Args:
            transcript_id: the internal numeric identifier
            gene_id: id of the gene which owns this transcript
            name: the transcript name, i.e. ENST00000380152
            chr: the chromosome the transcript is on
            exons: the exons (Exon objects or (start, end) tuples)
            source (TRANSCRIPT_SOURCE): the annotation source
            strand (STRAND): the genomic strand
            coding_start: start of the coding region. Not given for non-coding transcripts
            coding_end: end (exclusive) of the coding region

        Raises:
            InvalidArgumentError: the source or strand is not a recognized value
            AttributeError: only one of the coding bounds is given or the transcript has no exons
        """
        self.id = int(transcript_id)
        self.gene_id = int(gene_id)
        self.name = name
        self.chr = ReferenceName(chr)
        self.source = enforce(TRANSCRIPT_SOURCE, source)
        self.strand = enforce(STRAND, strand)

        if (coding_start is None) != (coding_end is None):
            raise AttributeError(
                'coding start and end must be given together', name, coding_start, coding_end
            )
        self.coding_start = int(coding_start) if coding_start is not None else None
        self.coding_end = int(coding_end) if coding_end is not None else None

        self.exons: List[Exon] = []
        for exon in exons:
            if not isinstance(exon, Exon):
                exon = Exon(exon[0], exon[1])
            self.exons.append(exon)
        if not self.exons:
            raise AttributeError('transcript must have at least one exon', name)
        self.exons.sort(key=lambda x: (x.start, x.end))

    @property
    def is_coding(self) -> bool:
        return self.coding_start is not None

    @property
    def start(self) -> int:
        return self.exons[0].start

    @property
    def end(self) -> int:
        return max([e.end for e in self.exons])

    def span(self) -> Interval:
        """the interval from the first exon start to the last exon end"""
        return Interval(self.start, self.end)

    def coding_region(self) -> Optional[Interval]:
        if not self.is_coding:
            return None
        return Interval(self.coding_start, self.coding_end)

    def clipped_exons(self) -> List[Interval]:
        """
        the exons of a coding transcript truncated to the coding region. Exons entirely
        outside the coding region are dropped. Non-coding transcripts return their exons unchanged

        Example:
            >>> Transcript(1, 1, 'T1', '1', [(80, 120), (600, 700)], coding_start=100, coding_end=500).clipped_exons()
            [Interval(100, 120)]
        """
        if not self.is_coding:
            return [Interval(e.start, e.end) for e in self.exons]
        result = []
        for exon in self.exons:
            clipped = Interval.intersection(exon, (self.coding_start, self.coding_end))
            if clipped is not None:
                result.append(clipped)
        return result

    def regions(self, coding_only: bool = False) -> List[Interval]:
        """
        the merged, non-overlapping regions covered by the exons of this transcript

        Args:
            coding_only: restrict to the coding portion of the exons
        """
        exons = self.clipped_exons() if coding_only else self.exons
        return Interval.min_nonoverlapping(*exons)

    def base_count(self, coding_only: bool = False) -> int:
        return sum([len(r) for r in self.regions(coding_only)])

    def key(self):
        return (self.id, self.gene_id, self.name, self.source)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'gene_id': self.gene_id,
            'name': self.name,
            'chr': str(self.chr),
            'strand': self.strand,
            'source': self.source,
            'coding_start': self.coding_start,
            'coding_end': self.coding_end,
            'exons': [{'start': e.start, 'end': e.end} for e in self.exons],
        }

    def __repr__(self):
        return 'Transcript({}:{}-{}, name={}, source={})'.format(
            self.chr, self.start, self.end, self.name, self.source
        )
