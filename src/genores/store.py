"""
read interface to the reference store (genes, aliases, transcripts and the phenotype ontology)
"""
from typing import Dict, Hashable, Iterable, List, Optional, Set, Tuple

import networkx as nx
from shortuuid import uuid

from .annotate.genomic import Exon, GeneRecord, Transcript
from .annotate.ontology import PhenotypeTerm
from .constants import ALIAS_TYPE, STRAND, TRANSCRIPT_SOURCE, enforce
from .util import logger


class AnnotationStore:
    """
    The only access the engine has to the persistent store. Every method is a plain read;
    implementations decide how the records are fetched

    Attributes:
        key: stable identity of the store, used to scope the process caches
    """

    key: Hashable

    def approved_gene_symbols(self) -> Set[str]:
        raise NotImplementedError('abstract method must be overridden')

    def gene_by_symbol(self, symbol: str) -> Optional[GeneRecord]:
        raise NotImplementedError('abstract method must be overridden')

    def aliases_of(self, symbol: str) -> List[Tuple[str, str]]:
        """
        Returns:
            (canonical symbol, alias type) for every gene claiming the alias, ordered by gene id
        """
        raise NotImplementedError('abstract method must be overridden')

    def alias_symbols_of(self, gene_id: int, kind: str) -> Set[str]:
        raise NotImplementedError('abstract method must be overridden')

    def transcripts_of(
        self, gene_id: int, source: Optional[str] = None, coding_only: bool = False
    ) -> List[Transcript]:
        """
        Args:
            gene_id: the gene the transcripts belong to
            source: restrict to transcripts from this source. Any source if not given
            coding_only: restrict to transcripts with a coding region
        """
        raise NotImplementedError('abstract method must be overridden')

    def transcript_snapshot(self) -> Iterable[Tuple[str, Transcript]]:
        """
        every transcript in the store paired with the canonical symbol of its gene
        """
        raise NotImplementedError('abstract method must be overridden')

    def phenotype_term(self, term_id: int) -> Optional[PhenotypeTerm]:
        raise NotImplementedError('abstract method must be overridden')

    def phenotype_term_by_name(self, name: str) -> Optional[PhenotypeTerm]:
        raise NotImplementedError('abstract method must be overridden')

    def phenotype_term_by_accession(self, accession: str) -> Optional[PhenotypeTerm]:
        raise NotImplementedError('abstract method must be overridden')

    def child_terms_of(self, term_id: int) -> List[int]:
        raise NotImplementedError('abstract method must be overridden')

    def genes_of_term(self, term_id: int) -> List[str]:
        """
        the gene symbols linked to a term, as they were recorded (not necessarily approved)
        """
        raise NotImplementedError('abstract method must be overridden')

    def terms_of_gene(self, symbol: str) -> List[PhenotypeTerm]:
        raise NotImplementedError('abstract method must be overridden')

    def phenotype_search_candidates(self, substring: str) -> List[PhenotypeTerm]:
        raise NotImplementedError('abstract method must be overridden')

    def ontology_cycles(self) -> List[List[int]]:
        raise NotImplementedError('abstract method must be overridden')

    def enum_values(self, table: str, column: str) -> Optional[List[str]]:
        raise NotImplementedError('abstract method must be overridden')


class SnapshotStore(AnnotationStore):
    """
    store backed by an in-memory snapshot of the reference database (see snapshot_schema.json)
    """

    DEFAULT_ENUMS: Dict[Tuple[str, str], List[str]] = {
        ('gene_alias', 'type'): sorted(ALIAS_TYPE.values()),
        ('gene_transcript', 'source'): sorted(TRANSCRIPT_SOURCE.values()),
        ('gene_transcript', 'strand'): [STRAND.POS, STRAND.NEG],
    }

    def __init__(self, data: Dict, key: Optional[Hashable] = None):
        """
        Args:
            data: the snapshot content
            key: identity used to scope process caches. A unique key is generated if not given
        """
        self.key = key if key is not None else uuid()
        self._genes_by_id: Dict[int, GeneRecord] = {}
        self._genes_by_symbol: Dict[str, GeneRecord] = {}
        self._aliases: Dict[str, List[Tuple[int, str]]] = {}
        self._alias_symbols: Dict[Tuple[int, str], Set[str]] = {}
        self._transcripts: Dict[int, List[Transcript]] = {}
        self._terms: Dict[int, PhenotypeTerm] = {}
        self._terms_by_name: Dict[str, PhenotypeTerm] = {}
        self._terms_by_accession: Dict[str, PhenotypeTerm] = {}
        self._genes_by_term: Dict[int, List[str]] = {}
        self._terms_by_gene: Dict[str, List[PhenotypeTerm]] = {}
        self._ontology = nx.DiGraph()
        self._enums = dict(self.DEFAULT_ENUMS)

        for gene_dict in data.get('genes', []):
            gene = GeneRecord(gene_dict['id'], gene_dict['symbol'])
            if gene.symbol in self._genes_by_symbol or gene.id in self._genes_by_id:
                raise KeyError('duplicate gene', gene)
            self._genes_by_id[gene.id] = gene
            self._genes_by_symbol[gene.symbol] = gene
            for alias in gene_dict.get('aliases', []):
                kind = enforce(ALIAS_TYPE, alias['type'])
                self._aliases.setdefault(alias['symbol'].upper(), []).append((gene.id, kind))
                self._alias_symbols.setdefault((gene.id, kind), set()).add(alias['symbol'])
        for matches in self._aliases.values():
            matches.sort()

        for tx_dict in data.get('transcripts', []):
            if tx_dict['gene_id'] not in self._genes_by_id:
                raise KeyError('transcript references an unknown gene', tx_dict['name'], tx_dict['gene_id'])
            transcript = Transcript(
                transcript_id=tx_dict['id'],
                gene_id=tx_dict['gene_id'],
                name=tx_dict['name'],
                chr=tx_dict['chr'],
                strand=tx_dict.get('strand', STRAND.NS),
                source=tx_dict['source'],
                coding_start=tx_dict.get('coding_start'),
                coding_end=tx_dict.get('coding_end'),
                exons=[Exon(e['start'], e['end'], name=e.get('name')) for e in tx_dict['exons']],
            )
            self._transcripts.setdefault(transcript.gene_id, []).append(transcript)
        for transcripts in self._transcripts.values():
            transcripts.sort(key=lambda t: (t.name, t.id))

        for term_dict in data.get('phenotypes', []):
            term = PhenotypeTerm(
                term_dict['id'],
                term_dict['accession'],
                term_dict['name'],
                synonyms=term_dict.get('synonyms', []),
            )
            if (
                term.id in self._terms
                or term.name in self._terms_by_name
                or term.accession in self._terms_by_accession
            ):
                raise KeyError('duplicate phenotype term', term)
            self._terms[term.id] = term
            self._terms_by_name[term.name] = term
            self._terms_by_accession[term.accession] = term
            self._ontology.add_node(term.id)
            self._genes_by_term[term.id] = list(term_dict.get('genes', []))
        for term_dict in data.get('phenotypes', []):
            for child_id in term_dict.get('children', []):
                if child_id not in self._terms:
                    logger.debug(f'term {term_dict["accession"]} has an unknown child term ({child_id})')
                self._ontology.add_edge(term_dict['id'], child_id)
            term = self._terms[term_dict['id']]
            for symbol in term_dict.get('genes', []):
                self._terms_by_gene.setdefault(symbol.upper(), []).append(term)

        for name, values in data.get('enums', {}).items():
            table, column = name.split('.', 1)
            self._enums[(table, column)] = list(values)

    def __repr__(self):
        return '{}(key={}, genes={}, terms={})'.format(
            self.__class__.__name__, self.key, len(self._genes_by_id), len(self._terms)
        )

    def approved_gene_symbols(self):
        return set(self._genes_by_symbol)

    def gene_by_symbol(self, symbol):
        return self._genes_by_symbol.get(symbol)

    def aliases_of(self, symbol):
        return [
            (self._genes_by_id[gene_id].symbol, kind)
            for gene_id, kind in self._aliases.get(symbol.upper(), [])
        ]

    def alias_symbols_of(self, gene_id, kind):
        return set(self._alias_symbols.get((gene_id, enforce(ALIAS_TYPE, kind)), set()))

    def transcripts_of(self, gene_id, source=None, coding_only=False):
        if source is not None:
            enforce(TRANSCRIPT_SOURCE, source)
        result = []
        for transcript in self._transcripts.get(gene_id, []):
            if source is not None and transcript.source != source:
                continue
            if coding_only and not transcript.is_coding:
                continue
            result.append(transcript)
        return result

    def transcript_snapshot(self):
        for gene_id, transcripts in sorted(self._transcripts.items()):
            symbol = self._genes_by_id[gene_id].symbol
            for transcript in transcripts:
                yield symbol, transcript

    def phenotype_term(self, term_id):
        return self._terms.get(term_id)

    def phenotype_term_by_name(self, name):
        return self._terms_by_name.get(name)

    def phenotype_term_by_accession(self, accession):
        return self._terms_by_accession.get(accession)

    def child_terms_of(self, term_id):
        if term_id not in self._ontology:
            return []
        return list(self._ontology.successors(term_id))

    def genes_of_term(self, term_id):
        return list(self._genes_by_term.get(term_id, []))

    def terms_of_gene(self, symbol):
        return list(self._terms_by_gene.get(symbol.upper(), []))

    def phenotype_search_candidates(self, substring):
        return [term for term in self._terms.values() if term.matches(substring)]

    def ontology_cycles(self):
        return [list(cycle) for cycle in nx.simple_cycles(self._ontology)]

    def enum_values(self, table, column):
        values = self._enums.get((table, column))
        return list(values) if values is not None else None
