"""
navigation of the phenotype ontology (HPO) and the genes linked to its terms
"""
from typing import Iterable, List, Optional, Set, Union

from .annotate.ontology import PhenotypeTerm
from .error import NotFoundError
from .resolve import GeneSymbolResolver
from .store import AnnotationStore
from .types import RevisitCallback
from .util import logger


class PhenotypeNavigator:
    """
    Walks the parent to child relation of the phenotype ontology.

    Traversals use an explicit work-list and a visited set, so deep or cyclic (malformed)
    ontologies never recurse without bound and always terminate
    """

    def __init__(self, store: AnnotationStore, resolver: GeneSymbolResolver):
        self.store = store
        self.resolver = resolver

    def term_by_name(self, name: str, throw_on_error: bool = False) -> Optional[PhenotypeTerm]:
        """
        Raises:
            NotFoundError: there is no term with this name and throw_on_error is set
        """
        term = self.store.phenotype_term_by_name(name)
        if term is None and throw_on_error:
            raise NotFoundError(f"Cannot find HPO phenotype with name '{name}'")
        return term

    def term_by_accession(
        self, accession: str, throw_on_error: bool = False
    ) -> Optional[PhenotypeTerm]:
        """
        Raises:
            NotFoundError: there is no term with this accession and throw_on_error is set
        """
        term = self.store.phenotype_term_by_accession(accession)
        if term is None and throw_on_error:
            raise NotFoundError(f"Cannot find HPO phenotype with accession '{accession}'")
        return term

    def _term_id(self, term: Union[PhenotypeTerm, str]) -> int:
        name = term.name if isinstance(term, PhenotypeTerm) else term
        found = self.store.phenotype_term_by_name(name)
        if found is None:
            raise NotFoundError(f"Unknown phenotype '{term}'")
        return found.id

    def _walk(self, term_id: int, recursive: bool, on_revisit: Optional[RevisitCallback]):
        """
        yields (term id, child term ids) for every term reached from the start term. Each term is yielded once
        """
        visited = {term_id}
        work_list = [term_id]
        while work_list:
            current = work_list.pop()
            children = self.store.child_terms_of(current) if recursive else []
            yield current, children
            for child in children:
                if child in visited:
                    if on_revisit is not None:
                        on_revisit(current, child)
                    continue
                visited.add(child)
                work_list.append(child)

    def descendant_genes(
        self,
        term: Union[PhenotypeTerm, str],
        recursive: bool = True,
        on_revisit: Optional[RevisitCallback] = None,
    ) -> Set[str]:
        """
        the genes linked to a term and (optionally) all of its descendant terms. Gene
        symbols are converted to approved symbols where possible and kept as they are otherwise

        Args:
            term: the phenotype term or its name
            recursive: include the genes of all descendant terms
            on_revisit: called with (parent id, child id) for every edge leading to a term that was already reached

        Raises:
            NotFoundError: the term is not in the ontology
        """
        genes = set()
        for term_id, _ in self._walk(self._term_id(term), recursive, on_revisit):
            for symbol in self.store.genes_of_term(term_id):
                genes.add(self.resolver.to_approved(symbol, return_input_when_unconvertable=True))
        return genes

    def descendant_terms(
        self,
        term: Union[PhenotypeTerm, str],
        recursive: bool = True,
        on_revisit: Optional[RevisitCallback] = None,
    ) -> List[PhenotypeTerm]:
        """
        the child terms (or all descendants when recursive) in the order they are reached. The term itself is not included

        Raises:
            NotFoundError: the term is not in the ontology
        """
        start_id = self._term_id(term)
        terms = []
        if not recursive:
            child_ids = self.store.child_terms_of(start_id)
        else:
            child_ids = []
            for _, children in self._walk(start_id, True, on_revisit):
                child_ids.extend(children)
        seen = {start_id}
        for child_id in child_ids:
            if child_id in seen:
                continue
            seen.add(child_id)
            child = self.store.phenotype_term(child_id)
            if child is None:
                logger.debug(f'skipping unknown child term ({child_id}) of {term}')
                continue
            terms.append(child)
        return terms

    def search(self, search_terms: Iterable[str] = ()) -> List[PhenotypeTerm]:
        """
        find terms where every search term is a (case-insensitive) substring of the name, accession or a synonym

        Args:
            search_terms: the text to search for. Blank terms are ignored

        Returns:
            terms sorted by name. All terms of the ontology if no search terms are given
        """
        search_terms = [t.strip() for t in search_terms]
        search_terms = [t for t in search_terms if t]

        if not search_terms:
            return sorted(self.store.phenotype_search_candidates(''), key=lambda t: (t.name, t.accession))

        matched: Optional[Set[PhenotypeTerm]] = None
        for text in search_terms:
            current = {
                term for term in self.store.phenotype_search_candidates(text) if term.matches(text)
            }
            matched = current if matched is None else matched & current
        return sorted(matched or [], key=lambda t: (t.name, t.accession))

    def phenotypes_of_gene(self, symbol: str) -> List[PhenotypeTerm]:
        """
        the terms linked to a gene, sorted by name
        """
        terms = set(self.store.terms_of_gene(symbol))
        approved = self.resolver.to_approved(symbol)
        if approved is not None:
            terms.update(self.store.terms_of_gene(approved))
        return sorted(terms, key=lambda t: (t.name, t.accession))
