"""
Helper classes for type hints
"""
from typing import Callable, Tuple

DiagnosticRow = Tuple[str, str]
RevisitCallback = Callable[[int, int], None]
