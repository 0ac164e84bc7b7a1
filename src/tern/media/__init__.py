"""Media types, content negotiation, rendering, and asset URLs."""

from tern.media.assets import AssetType
from tern.media.core import CURRENT, Media
from tern.media.locations import Location
from tern.media.types import Handler, MediaType

__all__ = [
    "CURRENT",
    "AssetType",
    "Handler",
    "Location",
    "Media",
    "MediaType",
]
