import re
from typing import Tuple

from ..constants import CHR_PREFIX

_SEX_AND_MITO_ORDER = {'X': 1, 'Y': 2, 'M': 3, 'MT': 3}


class ReferenceName(str):
    """
    Class for reference sequence names. Ensures that hg19/hg38 chromosome names match.

    Example:
        >>> ReferenceName('chr1') == ReferenceName('1')
        True
    """

    def __eq__(self, other):
        options = {str(self)}
        if self.startswith(CHR_PREFIX):
            options.add(str(self[len(CHR_PREFIX) :]))
        else:
            options.add(CHR_PREFIX + str(self))
        return other in options

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.standard())

    def standard(self) -> str:
        """
        the name without the chr prefix

        Example:
            >>> ReferenceName('chrX').standard()
            'X'
        """
        return re.sub('^' + CHR_PREFIX, '', str(self))

    def prefixed(self) -> str:
        """
        the name with the chr prefix, which is how output regions are labelled

        Example:
            >>> ReferenceName('2').prefixed()
            'chr2'
        """
        return CHR_PREFIX + self.standard()

    def sort_key(self) -> Tuple[int, int, str]:
        """
        numbered chromosomes first (numerically), then X, Y, M and then everything else alphabetically
        """
        name = self.standard()
        if name.isdigit():
            return (0, int(name), '')
        elif name.upper() in _SEX_AND_MITO_ORDER:
            return (1, _SEX_AND_MITO_ORDER[name.upper()], '')
        return (2, 0, name)

    def __lt__(self, other):
        return self.sort_key() < ReferenceName(other).sort_key()

    def __gt__(self, other):
        return self.sort_key() > ReferenceName(other).sort_key()

    def __ge__(self, other):
        if self == other:
            return True
        return self.__gt__(other)

    def __le__(self, other):
        if self == other:
            return True
        return self.__lt__(other)
