"""
module responsible for small utility functions and constants used throughout the genores package
"""
from typing import Dict

from mavis_config.constants import MavisNamespace

from .error import InvalidArgumentError

PROGNAME: str = 'genores'

CHR_PREFIX: str = 'chr'
"""prefix used for chromosome labels of output regions"""


class TRANSCRIPT_SOURCE(MavisNamespace):
    """
    holds controlled vocabulary for the annotation source of a transcript

    Attributes:
        CCDS: consensus coding sequence project
        ENSEMBL: ensembl gene build
    """

    CCDS: str = 'ccds'
    ENSEMBL: str = 'ensembl'


ALTERNATE_SOURCE: Dict[str, str] = {
    TRANSCRIPT_SOURCE.CCDS: TRANSCRIPT_SOURCE.ENSEMBL,
    TRANSCRIPT_SOURCE.ENSEMBL: TRANSCRIPT_SOURCE.CCDS,
}
"""the two transcript sources are the alternate of each other"""


class REGION_MODE(MavisNamespace):
    """
    holds controlled vocabulary for how genes are converted to regions

    Attributes:
        GENE: one region per transcript spanning all of its exons
        EXON: one region per exon, clipped to the coding region of coding transcripts
    """

    GENE: str = 'gene'
    EXON: str = 'exon'


class OVERLAP_MODE(MavisNamespace):
    """
    holds controlled vocabulary for the intervals used to index genes for overlap queries

    Attributes:
        TRANSCRIPT: one interval per transcript span
        EXON: one interval per exon
    """

    TRANSCRIPT: str = 'transcript'
    EXON: str = 'exon'


class ALIAS_TYPE(MavisNamespace):
    """
    holds controlled vocabulary for gene alias edges

    Attributes:
        PREVIOUS: a symbol the gene was approved under in the past
        SYNONYM: an alternate symbol in use for the gene
    """

    PREVIOUS: str = 'previous'
    SYNONYM: str = 'synonym'


class RESOLUTION_STATUS(MavisNamespace):
    """
    holds controlled vocabulary for the outcome of resolving a gene symbol

    Attributes:
        APPROVED: the input is an approved symbol
        REPLACED: the input is an alias of exactly one gene
        AMBIGUOUS: the input is an alias of more than one gene
        UNKNOWN: the input could not be resolved
    """

    APPROVED: str = 'approved'
    REPLACED: str = 'replaced'
    AMBIGUOUS: str = 'ambiguous'
    UNKNOWN: str = 'unknown'


class STRAND(MavisNamespace):
    """
    holds controlled vocabulary for allowed strand values

    Attributes:
        POS: the positive/forward strand
        NEG: the negative/reverse strand
        NS: strand is not specified
    """

    POS: str = '+'
    NEG: str = '-'
    NS: str = '?'


def alternate_source(source: str) -> str:
    """
    Example:
        >>> alternate_source('ccds')
        'ensembl'
    """
    return ALTERNATE_SOURCE[enforce(TRANSCRIPT_SOURCE, source)]


def enforce(namespace, value):
    """
    check that a value belongs to a controlled vocabulary

    Raises:
        InvalidArgumentError: the value is not a member of the namespace
    """
    if value not in namespace.values():
        raise InvalidArgumentError(
            f'Invalid {namespace.__name__.lower()} {repr(value)}. Valid values are: {", ".join(sorted(namespace.values()))}.'
        )
    return value
