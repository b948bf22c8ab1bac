"""Domain layer: exceptions shared by services and presentation.

No dependencies on infrastructure or presentation.
"""

from music_api.domain.exceptions import (
    BusinessRuleException,
    MusicCatalogException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "BusinessRuleException",
    "MusicCatalogException",
    "ResourceNotFoundException",
    "ValidationException",
]
