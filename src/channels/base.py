"""
Base Channel Module.

Formatter interface shared by alert channels. A channel renders a rated
listing either as a full message or as a short photo caption.
"""

from abc import ABC, abstractmethod

from src.modules.listings import RatedListing


class BaseFormatter(ABC):
    """Renders rated listings for one messaging platform."""

    # Longest caption the platform accepts under a photo
    caption_limit: int = 1024

    @abstractmethod
    def format_listing(self, listing: RatedListing) -> str:
        """Full alert text for a listing."""

    @abstractmethod
    def format_caption(self, listing: RatedListing) -> str:
        """Short alert text to attach to the listing photo."""

    def fits_caption(self, text: str) -> bool:
        """Whether text can be sent as a photo caption."""
        return len(text) <= self.caption_limit
