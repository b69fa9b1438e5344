"""
Domain Handlers

Domain-specific component and architecture templates used by the enhanced
engine.
"""

from .brands import BrandCharacteristics, BrandsDomainHandler
from .software import SoftwareDomainHandler, SoftwarePatterns

__all__ = [
    'BrandCharacteristics', 'BrandsDomainHandler',
    'SoftwareDomainHandler', 'SoftwarePatterns',
]
