"""Watermark stamping for output pages.

A watermark is made of up to four text stamps and an optional logo:

* ``diagonal`` and ``crossed`` draw the stamp text across the page at +60 and
  -60 degrees. The draw origin is chosen so the centre of the rotated text box
  lands on the page centre.
* ``bottom`` and ``top`` draw a small, horizontally centred stamp near the
  page edges with a slightly stronger opacity.
* The logo is scaled relative to the page width and centred behind the text.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from ..backends import FontHandle, ImageHandle, OutputDocument, Page
from ..types import LogoImage, WatermarkConfig

LOGGER = logging.getLogger("pdfbinder.watermark")

WATERMARK_ANGLE = 60.0
ROTATED_FONT_RATIO = 0.11
EDGE_FONT_SIZE = 10.0
BOTTOM_MARGIN = 15.0
TOP_MARGIN = 25.0
EDGE_OPACITY_BOOST = 0.4


def rotated_font_size(page_width: float, page_height: float) -> float:
    return min(page_width, page_height) * ROTATED_FONT_RATIO


def rotated_text_origin(
    page_width: float,
    page_height: float,
    text_width: float,
    text_height: float,
    angle: float,
) -> tuple[float, float]:
    """Return the origin that centres a text box rotated by *angle* degrees.

    The half-extent vector of the unrotated box is rotated by *angle* and
    subtracted from the page centre.
    """

    radians = math.radians(angle)
    cos = math.cos(radians)
    sin = math.sin(radians)
    center_x = page_width / 2
    center_y = page_height / 2
    x = center_x - (text_width / 2 * cos - text_height / 2 * sin)
    y = center_y - (text_width / 2 * sin + text_height / 2 * cos)
    return x, y


def edge_opacity(opacity: float) -> float:
    return min(opacity + EDGE_OPACITY_BOOST, 1.0)


def _draw_logo(page: Page, logo: ImageHandle, config: WatermarkConfig) -> None:
    scale_factor = (page.width * config.logo_scale) / logo.width
    scaled_width, scaled_height = logo.scale(scale_factor)
    page.draw_image(
        logo,
        x=page.width / 2 - scaled_width / 2,
        y=page.height / 2 - scaled_height / 2,
        width=scaled_width,
        height=scaled_height,
        opacity=config.logo_opacity,
    )


def _draw_rotated_stamp(page: Page, font: FontHandle, config: WatermarkConfig, angle: float) -> None:
    text = config.stamp_text
    font_size = rotated_font_size(page.width, page.height)
    text_width = font.width_of_text_at_size(text, font_size)
    text_height = font.height_at_size(font_size)
    x, y = rotated_text_origin(page.width, page.height, text_width, text_height, angle)
    page.draw_text(
        text,
        x=x,
        y=y,
        size=font_size,
        font=font,
        color=config.text_color,
        opacity=config.text_opacity,
        rotate=angle,
    )


def _draw_edge_stamp(page: Page, font: FontHandle, config: WatermarkConfig, y: float) -> None:
    text = config.stamp_text
    text_width = font.width_of_text_at_size(text, EDGE_FONT_SIZE)
    page.draw_text(
        text,
        x=page.width / 2 - text_width / 2,
        y=y,
        size=EDGE_FONT_SIZE,
        font=font,
        color=config.text_color,
        opacity=edge_opacity(config.text_opacity),
    )


def apply_watermark(
    page: Page,
    font: FontHandle,
    config: WatermarkConfig,
    logo: Optional[ImageHandle] = None,
) -> None:
    """Draw the stamps enabled in *config* onto *page*.

    The logo is drawn first so the text stays legible on top of it. A config
    with every flag disabled and no logo draws nothing.
    """

    if logo is not None:
        _draw_logo(page, logo, config)

    if config.diagonal:
        _draw_rotated_stamp(page, font, config, WATERMARK_ANGLE)

    if config.crossed:
        _draw_rotated_stamp(page, font, config, -WATERMARK_ANGLE)

    if config.bottom:
        _draw_edge_stamp(page, font, config, BOTTOM_MARGIN)

    if config.top:
        _draw_edge_stamp(page, font, config, page.height - TOP_MARGIN)


def embed_logo(output: OutputDocument, logo: Optional[LogoImage]) -> Optional[ImageHandle]:
    """Embed the caller's logo into *output*, or return ``None`` without one."""
    if logo is None:
        return None
    return output.embed_image(logo.data, logo.kind)


def watermark_pages(
    pages: Iterable[Page],
    font: FontHandle,
    config: WatermarkConfig,
    logo: Optional[ImageHandle] = None,
) -> int:
    """Stamp every page in *pages* and return how many were stamped."""
    count = 0
    for page in pages:
        apply_watermark(page, font, config, logo)
        count += 1
    LOGGER.debug("Watermarked %d page(s)", count)
    return count


__all__ = [
    "WATERMARK_ANGLE",
    "ROTATED_FONT_RATIO",
    "EDGE_FONT_SIZE",
    "BOTTOM_MARGIN",
    "TOP_MARGIN",
    "apply_watermark",
    "edge_opacity",
    "embed_logo",
    "rotated_font_size",
    "rotated_text_origin",
    "watermark_pages",
]
