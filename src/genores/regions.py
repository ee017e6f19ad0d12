"""
conversion of genes to genomic regions (BED regions)
"""
from typing import Iterable, List, Optional

from .annotate.genomic import Transcript
from .constants import REGION_MODE, TRANSCRIPT_SOURCE, alternate_source, enforce
from .region import BedRegion, merge_regions, sort_regions
from .resolve import GeneSymbolResolver
from .store import AnnotationStore
from .util import report


class RegionMapper:
    """
    maps genes to the regions covered by their transcripts or exons
    """

    def __init__(self, store: AnnotationStore, resolver: GeneSymbolResolver):
        self.store = store
        self.resolver = resolver

    def transcripts(
        self, gene_id: int, source: Optional[str] = None, coding_only: bool = False
    ) -> List[Transcript]:
        """
        the transcripts of a gene ordered by name

        Args:
            gene_id: the gene id
            source (TRANSCRIPT_SOURCE): restrict to this source. All sources if not given
            coding_only: restrict to coding transcripts
        """
        if source is not None:
            enforce(TRANSCRIPT_SOURCE, source)
        return sorted(
            self.store.transcripts_of(gene_id, source, coding_only), key=lambda t: (t.name, t.id)
        )

    def _transcript_regions(
        self, transcript: Transcript, mode: str, annotation: str
    ) -> List[BedRegion]:
        chrom = transcript.chr.prefixed()
        if mode == REGION_MODE.GENE:
            return [BedRegion(chrom, transcript.start, transcript.end, [annotation])]
        return [BedRegion(chrom, exon.start, exon.end, [annotation]) for exon in transcript.clipped_exons()]

    def _gene_regions(
        self, symbol: str, transcripts: Iterable[Transcript], mode: str, annotate_transcript_names: bool
    ) -> List[BedRegion]:
        regions = []
        for transcript in transcripts:
            annotation = f'{symbol} {transcript.name}' if annotate_transcript_names else symbol
            regions.extend(self._transcript_regions(transcript, mode, annotation))
        return regions

    def _finalize(self, regions: Iterable[BedRegion], annotate_transcript_names: bool) -> List[BedRegion]:
        # transcript labels must stay distinguishable so those regions are never merged
        if annotate_transcript_names:
            return sort_regions(regions)
        return merge_regions(regions)

    def regions_for_gene(
        self,
        gene: str,
        source: str = TRANSCRIPT_SOURCE.CCDS,
        mode: str = REGION_MODE.GENE,
        allow_fallback_source: bool = False,
        annotate_transcript_names: bool = False,
        messages: Optional[List[str]] = None,
    ) -> List[BedRegion]:
        """
        convert a gene to the regions of its transcripts

        Args:
            gene: the gene symbol (does not need to be approved)
            source (TRANSCRIPT_SOURCE): the transcript source to use
            mode (REGION_MODE): one region per transcript (gene) or one region per exon (exon)
            allow_fallback_source: use transcripts of any source if those of the requested source yield no region
            annotate_transcript_names: annotate regions with the transcript name as well as the gene symbol
            messages: diagnostics for genes which are skipped are appended here

        Returns:
            regions sorted by chromosome and start. Regions are merged unless they are annotated with transcript names

        Raises:
            InvalidArgumentError: the mode or source is not recognized
        """
        enforce(REGION_MODE, mode)
        enforce(TRANSCRIPT_SOURCE, source)

        gene_record = self.resolver.gene(gene)
        if gene_record is None:
            report(f"Gene name '{gene}' is no HGNC-approved symbol. Skipping it!", messages)
            return []
        symbol = gene_record.symbol

        # a transcript whose exons are all clipped away yields no region and does not count
        regions = self._gene_regions(
            symbol, self.transcripts(gene_record.id, source), mode, annotate_transcript_names
        )
        if not regions and allow_fallback_source:
            regions = self._gene_regions(
                symbol, self.transcripts(gene_record.id), mode, annotate_transcript_names
            )
        if not regions:
            report(f"No transcripts found for gene '{gene}'. Skipping it!", messages)
            return []
        return self._finalize(regions, annotate_transcript_names)

    def regions_for_genes(
        self,
        genes: Iterable[str],
        source: str = TRANSCRIPT_SOURCE.CCDS,
        mode: str = REGION_MODE.GENE,
        allow_fallback_source: bool = False,
        annotate_transcript_names: bool = False,
        messages: Optional[List[str]] = None,
    ) -> List[BedRegion]:
        """
        the union of the regions of each gene. See :meth:`regions_for_gene`
        """
        enforce(REGION_MODE, mode)
        regions = []
        for gene in sorted(set(genes)):
            regions.extend(
                self.regions_for_gene(
                    gene,
                    source=source,
                    mode=mode,
                    allow_fallback_source=allow_fallback_source,
                    annotate_transcript_names=annotate_transcript_names,
                    messages=messages,
                )
            )
        return self._finalize(regions, annotate_transcript_names)

    def longest_coding_transcript(
        self,
        gene: str,
        source: str = TRANSCRIPT_SOURCE.CCDS,
        fallback_alt_source: bool = False,
        fallback_alt_source_noncoding: bool = False,
    ) -> Optional[Transcript]:
        """
        the transcript covering the most (coding) bases

        Coding transcripts of the requested source are used first, then coding transcripts
        of the alternate source and finally any transcript of the alternate source,
        depending on the fallback flags. Transcripts are compared by the bases covered by
        their merged exons (clipped to the coding region when only coding transcripts are
        considered). Ties go to the first transcript in name order

        Returns:
            None if the gene cannot be resolved or no transcript qualifies
        """
        enforce(TRANSCRIPT_SOURCE, source)
        gene_id = self.resolver.gene_id(gene)
        if gene_id is None:
            return None

        alt_source = alternate_source(source)
        coding_only = True
        candidates = self.transcripts(gene_id, source, coding_only=True)
        if not candidates and fallback_alt_source:
            candidates = self.transcripts(gene_id, alt_source, coding_only=True)
        if not candidates and fallback_alt_source_noncoding:
            coding_only = False
            candidates = self.transcripts(gene_id, alt_source)

        longest = None
        longest_count = -1
        for transcript in candidates:
            count = transcript.base_count(coding_only=coding_only)
            if count > longest_count:
                longest, longest_count = transcript, count
        return longest
