# navi_travel/api/export/capture.py
"""Turn the rendered itinerary into a single raster image."""

import io
import logging
from typing import Sequence, Union

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from navi_travel.api.errors import CaptureFailure
from navi_travel.api.models import ItineraryDay

logger = logging.getLogger(__name__)

SnapshotSource = Union[bytes, bytearray, io.IOBase, Image.Image, None]

BASE_WIDTH_PX = 800
MARGIN_PX = 24
LINE_HEIGHT_PX = 18
DAY_GAP_PX = 12
BACKGROUND = "white"
HEADING_COLOR = (17, 24, 39)
TEXT_COLOR = (75, 85, 99)


def capture_snapshot(source: SnapshotSource) -> Image.Image:
    """Decode a client-side capture of the itinerary into an RGB image.

    Raises:
        CaptureFailure: if the capture is missing, empty or not an image.
    """
    if source is None:
        raise CaptureFailure("Could not find the itinerary content element")

    if isinstance(source, Image.Image):
        image = source
    else:
        if isinstance(source, (bytes, bytearray)):
            if not source:
                raise CaptureFailure("Could not find the itinerary content element")
            source = io.BytesIO(source)
        try:
            image = Image.open(source)
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Snapshot could not be decoded: {e}")
            raise CaptureFailure(f"Could not read the itinerary snapshot: {e}") from e

    if image.width <= 0 or image.height <= 0:
        raise CaptureFailure("Itinerary snapshot is empty")

    if image.mode != "RGB":
        image = image.convert("RGB")
    logger.debug(f"Captured snapshot {image.width}x{image.height}")
    return image


def _activity_lines(days: Sequence[ItineraryDay]):
    for day in days:
        yield ("heading", f"Day {day.day}")
        for activity in day.activities:
            yield ("text", f"{activity.time}  {activity.title}")
            if activity.location:
                yield ("text", f"    {activity.location}")
            if activity.description:
                yield ("text", f"    {activity.description}")
        yield ("gap", "")


def render_itinerary_snapshot(title: str, days: Sequence[ItineraryDay], scale: int = 2) -> Image.Image:
    """Draw the itinerary as plain text when no client capture is available.

    ``scale`` multiplies every dimension, like a high-DPI capture.
    """
    scale = max(1, int(scale))
    lines = [("heading", title)] + [("gap", "")] + list(_activity_lines(days))

    height = MARGIN_PX * 2
    for kind, _ in lines:
        height += DAY_GAP_PX if kind == "gap" else LINE_HEIGHT_PX

    image = Image.new("RGB", (BASE_WIDTH_PX * scale, height * scale), BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    y = MARGIN_PX
    for kind, text in lines:
        if kind == "gap":
            y += DAY_GAP_PX
            continue
        color = HEADING_COLOR if kind == "heading" else TEXT_COLOR
        draw.text((MARGIN_PX * scale, y * scale), text, fill=color, font=font)
        y += LINE_HEIGHT_PX

    logger.debug(f"Rendered itinerary snapshot {image.width}x{image.height}")
    return image
