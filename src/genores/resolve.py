"""
resolution of gene symbols to approved (canonical) symbols through the alias graph
"""
from typing import Dict, Iterable, List, Optional, Set

from .annotate.genomic import GeneRecord
from .cache import CACHE, ProcessCache
from .constants import ALIAS_TYPE, RESOLUTION_STATUS
from .store import AnnotationStore
from .types import DiagnosticRow
from .util import unique_in_order


class ResolutionResult:
    """
    the outcome of resolving a gene symbol

    Attributes:
        status (RESOLUTION_STATUS): the kind of outcome
        query: the normalized input symbol
        symbol: the approved symbol. Only set for approved or replaced symbols
        candidates: the approved symbols the input is an alias of (ordered by gene id)
        via (ALIAS_TYPE): the type of alias edge used, for replaced or ambiguous symbols
    """

    def __init__(
        self,
        status: str,
        query: str,
        symbol: Optional[str] = None,
        candidates: Iterable[str] = (),
        via: Optional[str] = None,
    ):
        self.status = status
        self.query = query
        self.symbol = symbol
        self.candidates = tuple(candidates)
        self.via = via

    @property
    def is_resolved(self) -> bool:
        """True when the input maps to exactly one approved symbol"""
        return self.status in {RESOLUTION_STATUS.APPROVED, RESOLUTION_STATUS.REPLACED}

    @property
    def message(self) -> str:
        """
        human readable description of the outcome

        Example:
            >>> ResolutionResult(RESOLUTION_STATUS.REPLACED, 'BAR', 'BAZ', ['BAZ'], ALIAS_TYPE.PREVIOUS).message
            'REPLACED: BAR is a previous symbol'
        """
        if self.status == RESOLUTION_STATUS.APPROVED:
            return f'KEPT: {self.query} is an approved symbol'
        elif self.status == RESOLUTION_STATUS.REPLACED:
            return f'REPLACED: {self.query} is {_describe_alias(self.via)}'
        elif self.status == RESOLUTION_STATUS.AMBIGUOUS:
            return f'ERROR: {self.query} is {_describe_alias(self.via)} of the genes {", ".join(self.candidates)}'
        return f'ERROR: {self.query} is an unknown symbol'

    def key(self):
        return (self.status, self.query, self.symbol, self.candidates, self.via)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        if self.status == RESOLUTION_STATUS.AMBIGUOUS:
            return 'ResolutionResult({}, {}, candidates={})'.format(
                self.status, self.query, list(self.candidates)
            )
        return 'ResolutionResult({}, {}, symbol={})'.format(self.status, self.query, self.symbol)


def _describe_alias(kind: Optional[str]) -> str:
    if kind == ALIAS_TYPE.SYNONYM:
        return 'a synonymous symbol'
    return 'a previous symbol'


def normalize_symbol(symbol) -> str:
    """
    Example:
        >>> normalize_symbol(' brca2 ')
        'BRCA2'
    """
    if isinstance(symbol, bytes):
        symbol = symbol.decode('utf8')
    return str(symbol).strip().upper()


class GeneSymbolResolver:
    """
    Resolves gene symbols using the approved symbols and the previous/synonym alias edges of the store.

    The approved symbols and every resolution outcome are cached for the lifetime of the
    process, so changes to the store are not seen until the cache is reset
    """

    def __init__(self, store: AnnotationStore, cache: ProcessCache = CACHE):
        self.store = store
        self.cache = cache

    def approved_symbols(self) -> Dict[str, str]:
        """
        the approved symbols of the store, keyed by their normalized form
        """
        return self.cache.get(
            (self.store.key, 'approved_gene_symbols'),
            lambda: {normalize_symbol(s): s for s in self.store.approved_gene_symbols()},
        )

    def _resolved(self) -> Dict[str, ResolutionResult]:
        return self.cache.get((self.store.key, 'resolved_gene_symbols'), dict)

    def resolve(self, raw_symbol) -> ResolutionResult:
        """
        resolve a gene symbol. Approved symbols are kept, then previous symbols and
        finally synonymous symbols are tried. Ambiguity is reported rather than resolved
        """
        query = normalize_symbol(raw_symbol)
        resolved = self._resolved()
        try:
            return resolved[query]
        except KeyError:
            pass
        return resolved.setdefault(query, self._lookup(query))

    def _lookup(self, query: str) -> ResolutionResult:
        if not query:
            return ResolutionResult(RESOLUTION_STATUS.UNKNOWN, query)

        approved = self.approved_symbols()
        if query in approved:
            return ResolutionResult(
                RESOLUTION_STATUS.APPROVED, query, approved[query], [approved[query]]
            )

        aliases = self.store.aliases_of(query)
        for kind in [ALIAS_TYPE.PREVIOUS, ALIAS_TYPE.SYNONYM]:
            candidates = unique_in_order([symbol for symbol, alias_type in aliases if alias_type == kind])
            if len(candidates) == 1:
                return ResolutionResult(
                    RESOLUTION_STATUS.REPLACED, query, candidates[0], candidates, via=kind
                )
            elif len(candidates) > 1:
                return ResolutionResult(
                    RESOLUTION_STATUS.AMBIGUOUS, query, candidates=candidates, via=kind
                )
        return ResolutionResult(RESOLUTION_STATUS.UNKNOWN, query)

    def to_approved(self, symbol, return_input_when_unconvertable: bool = False) -> Optional[str]:
        """
        best effort conversion to the approved symbol

        Args:
            symbol: the gene symbol to convert
            return_input_when_unconvertable: return the normalized input instead of None for ambiguous or unknown symbols

        Example:
            >>> resolver.to_approved('BAR', return_input_when_unconvertable=True)
            'BAR'
        """
        result = self.resolve(symbol)
        if result.is_resolved:
            return result.symbol
        if return_input_when_unconvertable:
            return result.query
        return None

    def to_approved_set(
        self, symbols: Iterable, return_input_when_unconvertable: bool = False
    ) -> Set[str]:
        result = set()
        for symbol in symbols:
            approved = self.to_approved(symbol, return_input_when_unconvertable)
            if approved:
                result.add(approved)
        return result

    def diagnose(self, symbol) -> ResolutionResult:
        """
        the full resolution outcome, including every ambiguous candidate. See :attr:`ResolutionResult.message`
        """
        return self.resolve(symbol)

    def diagnose_all(self, symbol) -> List[DiagnosticRow]:
        """
        one (symbol, message) row per candidate gene. Unknown symbols are returned unchanged with an error message
        """
        result = self.resolve(symbol)
        if result.status == RESOLUTION_STATUS.UNKNOWN:
            return [(result.query, result.message)]
        message = result.message
        if result.status == RESOLUTION_STATUS.AMBIGUOUS:
            message = f'REPLACED: {result.query} is {_describe_alias(result.via)}'
        return [(candidate, message) for candidate in result.candidates]

    def gene(self, symbol) -> Optional[GeneRecord]:
        """
        the gene record of the resolved symbol. None for ambiguous or unknown symbols
        """
        approved = self.to_approved(symbol)
        if approved is None:
            return None
        return self.store.gene_by_symbol(approved)

    def gene_id(self, symbol) -> Optional[int]:
        gene = self.gene(symbol)
        return gene.id if gene is not None else None

    def previous_symbols(self, symbol) -> Set[str]:
        gene = self.gene(symbol)
        if gene is None:
            return set()
        return self.store.alias_symbols_of(gene.id, ALIAS_TYPE.PREVIOUS)

    def synonymous_symbols(self, symbol) -> Set[str]:
        gene = self.gene(symbol)
        if gene is None:
            return set()
        return self.store.alias_symbols_of(gene.id, ALIAS_TYPE.SYNONYM)
