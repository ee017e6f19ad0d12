import logging
from typing import Iterable, List, Optional

from .constants import PROGNAME

logger = logging.getLogger(PROGNAME)


def report(message: str, messages: Optional[List[str]] = None, level: int = logging.WARNING):
    """
    log a diagnostic message and also hand it back to the caller if they collect messages

    Args:
        message: the text to report
        messages: list the calling tool collects diagnostics in
        level: the logging level
    """
    logger.log(level, message)
    if messages is not None:
        messages.append(message)


def unique_in_order(items: Iterable) -> List:
    """
    Example:
        >>> unique_in_order(['b', 'a', 'b'])
        ['b', 'a']
    """
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
