"""Paginated PDF export of itineraries."""

from .capture import capture_snapshot, render_itinerary_snapshot
from .paginator import PagePlacement, paginate
from .pdf import (
    ExportedDocument,
    ExportRegistry,
    ItineraryExport,
    build_itinerary_pdf,
    export_filename,
)

__all__ = [
    'capture_snapshot',
    'render_itinerary_snapshot',
    'PagePlacement',
    'paginate',
    'ExportedDocument',
    'ExportRegistry',
    'ItineraryExport',
    'build_itinerary_pdf',
    'export_filename',
]
