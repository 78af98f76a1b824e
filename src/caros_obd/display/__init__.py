"""Terminal display utilities."""

from .console import Console, setup_logging
from .tables import TableDisplay

__all__ = ["Console", "TableDisplay", "setup_logging"]
