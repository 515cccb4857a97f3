"""Board coordination and rendering."""

from .app import TableFetcher, TripBoard
from .render import board_to_dict, render_board
from .sections import SectionConfig, SectionStatus, SectionView, sections_from_settings

__all__ = [
    "SectionConfig",
    "SectionStatus",
    "SectionView",
    "TableFetcher",
    "TripBoard",
    "board_to_dict",
    "render_board",
    "sections_from_settings",
]
