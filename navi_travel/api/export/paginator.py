# navi_travel/api/export/paginator.py
"""Split one tall captured image across fixed-size pages."""

from dataclasses import dataclass
from typing import List

# A4 portrait, millimetres
PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 295
CONTENT_START_MM = 30


@dataclass(frozen=True)
class PagePlacement:
    """Where the full image is drawn on one page; the page clips the rest."""

    page_number: int
    x: float
    y: float
    width: float
    height: float


def scaled_height(source_width: float, source_height: float, page_width: float = PAGE_WIDTH_MM) -> float:
    """Image height once scaled uniformly to the page width."""
    if source_width <= 0 or source_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive, got {source_width}x{source_height}"
        )
    return source_height * page_width / source_width


def paginate(
    source_width: float,
    source_height: float,
    page_width: float = PAGE_WIDTH_MM,
    page_height: float = PAGE_HEIGHT_MM,
    content_start: float = CONTENT_START_MM,
) -> List[PagePlacement]:
    """Lay the image out top to bottom over as many pages as needed.

    Page 1 draws it at ``content_start``, below the title block. Every later
    page draws the same image shifted up by ``(page_height - content_start)``
    times the number of pages already placed. The offset depends only on the
    page index, never on the remaining height.
    """
    img_height = scaled_height(source_width, source_height, page_width)
    first_page_room = page_height - content_start

    placements = [PagePlacement(1, 0, content_start, page_width, img_height)]
    height_left = img_height - first_page_room

    while height_left > 0:
        pages_before = len(placements)
        placements.append(
            PagePlacement(
                page_number=pages_before + 1,
                x=0,
                y=-first_page_room * pages_before,
                width=page_width,
                height=img_height,
            )
        )
        height_left -= page_height

    return placements
