"""
entry point bundling the resolver, the region mapper, the phenotype navigator and the gene overlap indexes of one store
"""
from typing import Dict, Iterable, List, Optional, Set

from .annotate.file_io import ReferenceFile
from .cache import CACHE, ProcessCache
from .constants import OVERLAP_MODE, REGION_MODE, RESOLUTION_STATUS, TRANSCRIPT_SOURCE, enforce
from .error import InvalidArgumentError
from .index import GeneOverlapIndex
from .phenotype import PhenotypeNavigator
from .region import BedRegion
from .regions import RegionMapper
from .resolve import GeneSymbolResolver, ResolutionResult
from .schemas import get_by_prefix
from .store import AnnotationStore
from .util import logger


class AnnotationEngine:
    """
    Attributes:
        store: the reference store all queries are answered from
        resolver: gene symbol resolution
        mapper: gene to region conversion
        navigator: phenotype ontology traversal
        config: options used as defaults by the engine level operations
    """

    def __init__(
        self, store: AnnotationStore, cache: ProcessCache = CACHE, config: Optional[Dict] = None
    ):
        self.store = store
        self.cache = cache
        self.config = dict(config or {})
        self.resolver = GeneSymbolResolver(store, cache=cache)
        self.mapper = RegionMapper(store, self.resolver)
        self.navigator = PhenotypeNavigator(store, self.resolver)

    @classmethod
    def from_config(cls, config: Dict, cache: ProcessCache = CACHE) -> 'AnnotationEngine':
        """
        create an engine for the reference snapshot(s) of a validated config (see :func:`genores.config.validate_config`)

        Raises:
            FileNotFoundError: no snapshot is given or a snapshot does not exist
        """
        snapshot = ReferenceFile.load_from_config(config, 'snapshot', cache=cache)
        snapshot.files_exist(not_empty=True)
        snapshot.load()
        return cls(snapshot.content, cache=cache, config=config)

    def __repr__(self):
        return '{}(store={})'.format(self.__class__.__name__, self.store)

    def _option(self, name: str, value):
        if value is not None:
            return value
        return self.config.get(name)

    def overlap_index(self, by: str = OVERLAP_MODE.TRANSCRIPT) -> GeneOverlapIndex:
        return GeneOverlapIndex.cached(self.store, by=by, cache=self.cache)

    # gene symbols
    def to_approved(self, symbol, return_input_when_unconvertable: bool = False) -> Optional[str]:
        return self.resolver.to_approved(symbol, return_input_when_unconvertable)

    def to_approved_set(self, symbols: Iterable, return_input_when_unconvertable: bool = False) -> Set[str]:
        return self.resolver.to_approved_set(symbols, return_input_when_unconvertable)

    def resolve(self, symbol) -> ResolutionResult:
        return self.resolver.resolve(symbol)

    def check_gene_names(self, symbols: Iterable) -> List[ResolutionResult]:
        """
        the resolution of every symbol which is not an approved symbol, in input order. Results
        which are resolved (replaced by a single gene) can be fixed automatically, the others need
        to be reviewed
        """
        outdated = []
        for symbol in symbols:
            result = self.resolver.resolve(symbol)
            if result.status != RESOLUTION_STATUS.APPROVED:
                logger.debug(result.message)
                outdated.append(result)
        return outdated

    # regions
    def regions_for_gene(
        self,
        gene: str,
        source: Optional[str] = None,
        mode: Optional[str] = None,
        allow_fallback_source: Optional[bool] = None,
        annotate_transcript_names: Optional[bool] = None,
        messages: Optional[List[str]] = None,
    ) -> List[BedRegion]:
        """
        See :meth:`RegionMapper.regions_for_gene`. Options not given are taken from the config
        """
        return self.regions_for_genes(
            [gene],
            source=source,
            mode=mode,
            allow_fallback_source=allow_fallback_source,
            annotate_transcript_names=annotate_transcript_names,
            messages=messages,
        )

    def regions_for_genes(
        self,
        genes: Iterable[str],
        source: Optional[str] = None,
        mode: Optional[str] = None,
        allow_fallback_source: Optional[bool] = None,
        annotate_transcript_names: Optional[bool] = None,
        messages: Optional[List[str]] = None,
    ) -> List[BedRegion]:
        options = get_by_prefix(self.config, 'regions.')
        kwargs = dict(
            source=source if source is not None else options.get('source', TRANSCRIPT_SOURCE.CCDS),
            allow_fallback_source=allow_fallback_source
            if allow_fallback_source is not None
            else options.get('fallback', False),
            annotate_transcript_names=annotate_transcript_names
            if annotate_transcript_names is not None
            else options.get('annotate_transcript_names', False),
            mode=mode if mode is not None else options.get('mode', REGION_MODE.GENE),
            messages=messages,
        )
        return self.mapper.regions_for_genes(genes, **kwargs)

    def longest_coding_transcript(
        self,
        gene: str,
        source: Optional[str] = None,
        fallback_alt_source: Optional[bool] = None,
        fallback_alt_source_noncoding: Optional[bool] = None,
    ):
        options = get_by_prefix(self.config, 'transcripts.')
        return self.mapper.longest_coding_transcript(
            gene,
            source=source
            if source is not None
            else self.config.get('regions.source', TRANSCRIPT_SOURCE.CCDS),
            fallback_alt_source=fallback_alt_source
            if fallback_alt_source is not None
            else options.get('fallback_alt_source', False),
            fallback_alt_source_noncoding=fallback_alt_source_noncoding
            if fallback_alt_source_noncoding is not None
            else options.get('fallback_alt_source_noncoding', False),
        )

    # overlap
    def genes_overlapping(self, chromosome: str, start: int, end: int, extend: Optional[int] = None) -> Set[str]:
        """
        the genes with a transcript intersecting [start - extend, end + extend)
        """
        extend = self._option('overlap.extend', extend) or 0
        return self.overlap_index(OVERLAP_MODE.TRANSCRIPT).query(chromosome, start, end, extend)

    def genes_overlapping_by_exon(
        self, chromosome: str, start: int, end: int, extend: Optional[int] = None
    ) -> Set[str]:
        """
        the genes with an exon intersecting [start - extend, end + extend)
        """
        extend = self._option('overlap.extend', extend) or 0
        return self.overlap_index(OVERLAP_MODE.EXON).query(chromosome, start, end, extend)

    def annotate_regions(
        self, regions: Iterable[BedRegion], extend: Optional[int] = None, by: Optional[str] = None
    ) -> List[BedRegion]:
        """
        append the symbols of the overlapping genes (sorted) to the annotations of each region.
        Regions without overlapping genes are returned unchanged

        Args:
            regions: the regions to annotate
            extend: number of bases added on both sides of each region
            by (OVERLAP_MODE): overlap by transcript span or by exon

        Raises:
            InvalidArgumentError: the overlap mode is not recognized
        """
        extend = self._option('overlap.extend', extend) or 0
        by = enforce(OVERLAP_MODE, self._option('overlap.by', by) or OVERLAP_MODE.TRANSCRIPT)
        index = self.overlap_index(by)
        annotated = []
        for region in regions:
            genes = index.query(region.chr, region.start, region.end, extend)
            annotated.append(region.with_annotations(*sorted(genes)))
        return annotated

    # phenotypes
    def descendant_genes(self, term, recursive: bool = True, on_revisit=None) -> Set[str]:
        return self.navigator.descendant_genes(term, recursive=recursive, on_revisit=on_revisit)

    def descendant_terms(self, term, recursive: bool = True, on_revisit=None):
        return self.navigator.descendant_terms(term, recursive=recursive, on_revisit=on_revisit)

    def search_phenotypes(self, search_terms: Iterable[str] = ()):
        return self.navigator.search(search_terms)

    def check_ontology(self) -> List[List[int]]:
        """
        the cycles in the child relation of the ontology. Traversals absorb these but they indicate malformed data
        """
        cycles = self.store.ontology_cycles()
        for cycle in cycles:
            logger.warning(f'phenotype ontology contains a cycle: {" -> ".join(str(i) for i in cycle)}')
        return cycles

    # store metadata
    def get_enum(self, table: str, column: str) -> List[str]:
        """
        the allowed values of an enumerated column of the store

        Raises:
            InvalidArgumentError: the table/column is not an enumerated column
        """

        def build():
            values = self.store.enum_values(table, column)
            if values is None:
                raise InvalidArgumentError(f"No enum column '{column}' in table '{table}'")
            return values

        return list(self.cache.get((self.store.key, 'enum', table, column), build))

    def reset(self) -> None:
        """
        drop every process cached value derived from this store
        """
        self.cache.reset(self.store.key)
