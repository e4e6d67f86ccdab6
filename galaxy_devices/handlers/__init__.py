"""Galaxy command sink handlers"""

from .galaxy import GalaxyHandler
from .dry_run import DryRunHandler

__all__ = [
    'GalaxyHandler',
    'DryRunHandler',
]
