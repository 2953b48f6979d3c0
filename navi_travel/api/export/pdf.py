# navi_travel/api/export/pdf.py
"""PDF generation for itinerary downloads."""
from __future__ import annotations

import io
import logging
import re
import threading
from contextlib import contextmanager
import unicodedata
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Optional, Sequence

from fpdf import FPDF
from PIL import Image

from navi_travel.api.config import get_export_config
from navi_travel.api.errors import CaptureFailure
from navi_travel.api.export.capture import capture_snapshot, render_itinerary_snapshot
from navi_travel.api.export.paginator import (
    CONTENT_START_MM,
    PAGE_HEIGHT_MM,
    PAGE_WIDTH_MM,
    paginate,
)
from navi_travel.api.models import ItineraryDay

logger = logging.getLogger(__name__)

TITLE_X_MM = 15
TITLE_Y_MM = 15
DATE_Y_MM = 22


def export_filename(title: str) -> str:
    """``"Weekend in Vashi"`` -> ``"Weekend_in_Vashi_itinerary.pdf"``."""
    return re.sub(r"\s+", "_", title) + "_itinerary.pdf"


def _ascii(text: str) -> str:
    normalized = unicodedata.normalize("NFKD", text)
    return normalized.encode("ascii", "ignore").decode("ascii")


def _jpeg_bytes(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.convert("RGB").save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def build_itinerary_pdf(
    title: str,
    image: Image.Image,
    generated_on: Optional[date] = None,
    jpeg_quality: int = 80,
) -> tuple[bytes, int]:
    """Create the PDF (as bytes) and return it with its page count.

    Page 1 carries the title block; the captured image is then sliced
    across pages as laid out by :func:`paginate`.
    """
    generated_on = generated_on or date.today()
    placements = paginate(image.width, image.height, PAGE_WIDTH_MM, PAGE_HEIGHT_MM, CONTENT_START_MM)
    jpeg = _jpeg_bytes(image, jpeg_quality)

    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.add_page()

    pdf.set_font("Helvetica", size=16)
    pdf.text(TITLE_X_MM, TITLE_Y_MM, _ascii(title))
    pdf.set_font("Helvetica", size=10)
    pdf.text(TITLE_X_MM, DATE_Y_MM, f"Generated on: {generated_on.strftime('%d/%m/%Y')}")

    for placement in placements:
        if placement.page_number > 1:
            pdf.add_page()
        pdf.image(
            io.BytesIO(jpeg),
            x=placement.x,
            y=placement.y,
            w=placement.width,
            h=placement.height,
        )

    raw_pdf = pdf.output()
    if isinstance(raw_pdf, str):
        return raw_pdf.encode("latin-1"), len(placements)
    return bytes(raw_pdf), len(placements)


@dataclass
class ExportedDocument:
    filename: str
    content: bytes
    page_count: int


class ItineraryExport:
    """One download: capture, then paginate into a PDF.

    ``cancel()`` may be called from another thread while the capture is in
    progress (see :class:`ExportRegistry`); a cancelled export builds no
    pages and returns None.
    """

    def __init__(
        self,
        title: str,
        days: Sequence[ItineraryDay],
        snapshot=None,
        capture: Callable = capture_snapshot,
        generated_on: Optional[date] = None,
        config: Optional[dict] = None,
    ):
        self.title = title
        self.days = list(days)
        self.snapshot = snapshot
        self.capture = capture
        self.generated_on = generated_on
        self.config = config or get_export_config()
        self._cancelled = threading.Event()
        self.document: Optional[ExportedDocument] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self):
        self._cancelled.set()
        logger.info(f"Export of '{self.title}' cancelled")

    def _capture(self) -> Image.Image:
        if self.snapshot is not None:
            return self.capture(self.snapshot)
        if not self.days:
            raise CaptureFailure("Could not find the itinerary content element")
        return render_itinerary_snapshot(self.title, self.days, scale=self.config["capture_scale"])

    def run(self) -> Optional[ExportedDocument]:
        """Run the export.

        Raises:
            CaptureFailure: if there is nothing usable to capture.
        """
        logger.info(f"Generating PDF for '{self.title}'")
        image = self._capture()

        if self.cancelled:
            logger.info(f"Skipping PDF for '{self.title}': export was cancelled")
            return None

        content, page_count = build_itinerary_pdf(
            self.title,
            image,
            generated_on=self.generated_on,
            jpeg_quality=self.config["jpeg_quality"],
        )
        self.document = ExportedDocument(export_filename(self.title), content, page_count)
        logger.info(f"Itinerary '{self.title}' exported: {page_count} page(s)")
        return self.document


class ExportRegistry:
    """In-flight exports by client-chosen id, so another request can cancel one."""

    def __init__(self):
        self.exports: Dict[str, ItineraryExport] = {}
        self.lock = threading.Lock()

    @contextmanager
    def track(self, export_id: Optional[str], export: ItineraryExport):
        """Register ``export`` for the duration of the block. No-op without an id."""
        if not export_id:
            yield export
            return

        with self.lock:
            self.exports[export_id] = export
        try:
            yield export
        finally:
            with self.lock:
                if self.exports.get(export_id) is export:
                    del self.exports[export_id]

    def cancel(self, export_id: str) -> bool:
        """Cancel a running export. False if no export has that id."""
        with self.lock:
            export = self.exports.get(export_id)
        if export is None:
            return False
        export.cancel()
        return True
