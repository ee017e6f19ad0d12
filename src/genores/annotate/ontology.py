from typing import Iterable, Optional


class PhenotypeTerm:
    """
    a term of the phenotype ontology (HPO)
    """

    def __init__(
        self,
        term_id: int,
        accession: str,
        name: str,
        synonyms: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            term_id: the internal numeric identifier
            accession: the stable external identifier, i.e. HP:0001250
            name: the display name of the term
            synonyms: alternate names for the term

        Example:
            >>> PhenotypeTerm(1, 'HP:0001250', 'Seizure', ['Epileptic seizure'])
        """
        self.id = int(term_id)
        self.accession = accession
        self.name = name
        self.synonyms = frozenset(synonyms or [])

    def matches(self, text: str) -> bool:
        """
        case-insensitive substring match against the name, accession or any synonym

        Example:
            >>> PhenotypeTerm(1, 'HP:0001250', 'Seizure').matches('seiz')
            True
        """
        text = text.lower()
        for field in [self.name, self.accession, *self.synonyms]:
            if field and text in field.lower():
                return True
        return False

    def key(self):
        return (self.accession, self.name)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __str__(self):
        return '{} - {}'.format(self.accession, self.name)

    def __repr__(self):
        return 'PhenotypeTerm({}, name={})'.format(self.accession, self.name)
