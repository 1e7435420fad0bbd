"""Procedural default cover page.

The cover is drawn from primitives only: bands, cards and pills are
rectangles, bullets are circles and the pill icons are diamond paths, so no
glyph outside the standard font encoding is ever needed. Every coordinate is
derived from the page size.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..backends import FontHandle, ImageHandle, OutputDocument, Page, StandardFont
from ..settings import DEFAULT_SETTINGS, BinderSettings
from ..types import RGB

LOGGER = logging.getLogger("pdfbinder.cover")

COVER_WIDTH = 595.28
COVER_HEIGHT = 841.89

BRAND = RGB(0.118, 0.227, 0.541)
BRAND_DARK = RGB(0.086, 0.157, 0.38)
ACCENT = RGB(0.976, 0.588, 0.2)
LIGHT = RGB(0.945, 0.957, 0.976)
WHITE = RGB(1.0, 1.0, 1.0)
INK = RGB(0.118, 0.161, 0.231)
MUTED = RGB(0.392, 0.455, 0.545)

HEADER_RATIO = 0.35

DESCRIPTION_LINES = (
    "These notes were collected and merged",
    "from trusted sources so you can revise",
    "every module in one place, in order.",
    "Keep this copy handy before exams.",
)
BULLETS = (
    "Module-wise notes",
    "Solved question papers",
    "Important topics marked",
    "Free for every student",
)
PILL_ROWS = (
    ("Lecture Notes", "Question Papers"),
    ("Lab Manuals", "Syllabus Copy"),
    ("Model Papers", "Quick Revision"),
)
PANEL_ENTRIES = ("Read", "Revise", "Share")


def _fit_size(font: FontHandle, text: str, max_width: float, preferred: float) -> float:
    width_at_one = font.width_of_text_at_size(text, 1.0)
    if width_at_one <= 0:
        return preferred
    return min(preferred, max_width / width_at_one)


def _centered_text(
    page: Page,
    text: str,
    *,
    font: FontHandle,
    size: float,
    y: float,
    color: RGB,
    center_x: Optional[float] = None,
) -> None:
    center_x = page.width / 2 if center_x is None else center_x
    width = font.width_of_text_at_size(text, size)
    page.draw_text(text, x=center_x - width / 2, y=y, size=size, font=font, color=color)


def _draw_diamond(page: Page, center_x: float, center_y: float, radius: float, color: RGB) -> None:
    page.draw_path(
        [
            (center_x, center_y + radius),
            (center_x + radius, center_y),
            (center_x, center_y - radius),
            (center_x - radius, center_y),
        ],
        color=color,
    )


def _draw_header(
    page: Page,
    bold: FontHandle,
    regular: FontHandle,
    settings: BinderSettings,
    logo: Optional[ImageHandle],
) -> float:
    width, height = page.size
    band_bottom = height * (1 - HEADER_RATIO)
    band_height = height - band_bottom
    page.draw_rectangle(x=0, y=band_bottom, width=width, height=band_height, color=BRAND)
    page.draw_rectangle(x=0, y=band_bottom, width=width, height=height * 0.005, color=ACCENT)

    title_y = band_bottom + band_height * 0.38
    title_size = _fit_size(bold, settings.cover_title, width * 0.85, 30)
    _centered_text(page, settings.cover_title, font=bold, size=title_size, y=title_y, color=WHITE)

    subtitle_size = _fit_size(regular, settings.cover_subtitle, width * 0.85, 12)
    _centered_text(page, settings.cover_subtitle, font=regular, size=subtitle_size, y=title_y - height * 0.033, color=LIGHT)

    if logo is not None:
        box_width = width * 0.3
        box_height = band_height * 0.28
        factor = min(box_width / logo.width, box_height / logo.height)
        logo_width, logo_height = logo.scale(factor)
        page.draw_image(
            logo,
            x=(width - logo_width) / 2,
            y=title_y + height * 0.043,
            width=logo_width,
            height=logo_height,
        )

    return band_bottom


def _draw_cards(page: Page, bold: FontHandle, regular: FontHandle, band_bottom: float) -> tuple[float, float, float, float]:
    width, height = page.size
    margin = width * 0.07
    gap = width * 0.04
    card_width = (width - 2 * margin - gap) / 2
    card_height = height * 0.2
    card_top = band_bottom - height * 0.04
    card_y = card_top - card_height
    inset = width * 0.027
    heading_y = card_top - height * 0.033
    line_height = height * 0.018

    page.draw_rectangle(
        x=margin,
        y=card_y,
        width=card_width,
        height=card_height,
        color=LIGHT,
        border_color=MUTED,
        border_width=0.5,
        radius=10,
    )
    page.draw_text("About these notes", x=margin + inset, y=heading_y, size=13, font=bold, color=INK)
    for index, line in enumerate(DESCRIPTION_LINES):
        line_y = heading_y - height * 0.029 - index * line_height
        page.draw_text(line, x=margin + inset, y=line_y, size=9.5, font=regular, color=MUTED)

    accent_x = margin + card_width + gap
    page.draw_rectangle(x=accent_x, y=card_y, width=card_width, height=card_height, color=ACCENT, radius=10)
    page.draw_text("What's inside", x=accent_x + inset, y=heading_y, size=13, font=bold, color=WHITE)
    for index, bullet in enumerate(BULLETS):
        baseline = heading_y - height * 0.031 - index * line_height * 1.45
        page.draw_circle(x=accent_x + width * 0.037, y=baseline + 3.5, radius=width * 0.0044, color=WHITE)
        page.draw_text(bullet, x=accent_x + width * 0.054, y=baseline, size=10, font=regular, color=WHITE)

    return margin, gap, card_width, card_y


def _draw_pills(
    page: Page,
    bold: FontHandle,
    margin: float,
    gap: float,
    pill_width: float,
    area_top: float,
) -> float:
    width, height = page.size
    pill_height = height * 0.033
    row_gap = height * 0.014
    bottom = area_top
    for row_index, row in enumerate(PILL_ROWS):
        y = area_top - (row_index + 1) * pill_height - row_index * row_gap
        for column, label in enumerate(row):
            x = margin + column * (pill_width + gap)
            page.draw_rectangle(
                x=x,
                y=y,
                width=pill_width,
                height=pill_height,
                color=LIGHT,
                border_color=BRAND,
                border_width=0.8,
                radius=pill_height / 2,
            )
            center_y = y + pill_height / 2
            _draw_diamond(page, x + width * 0.037, center_y, width * 0.0084, ACCENT)
            page.draw_text(label, x=x + width * 0.06, y=center_y - 3.5, size=10.5, font=bold, color=INK)
        bottom = y
    return bottom


def _draw_panel(page: Page, bold: FontHandle, margin: float, area_top: float) -> None:
    width, height = page.size
    panel_height = height * 0.1
    panel_y = area_top - panel_height
    panel_width = width - 2 * margin
    page.draw_rectangle(x=margin, y=panel_y, width=panel_width, height=panel_height, color=LIGHT, radius=8)

    column_width = panel_width / len(PANEL_ENTRIES)
    for index, label in enumerate(PANEL_ENTRIES):
        center_x = margin + column_width * (index + 0.5)
        icon_y = panel_y + panel_height * 0.62
        page.draw_circle(x=center_x, y=icon_y, radius=11, color=BRAND)
        page.draw_circle(x=center_x, y=icon_y, radius=4, color=WHITE)
        _centered_text(
            page,
            label,
            font=bold,
            size=10,
            y=panel_y + panel_height * 0.22,
            color=INK,
            center_x=center_x,
        )


def _draw_footer(page: Page, regular: FontHandle, settings: BinderSettings) -> None:
    width, height = page.size
    footer_height = height * 0.06
    page.draw_rectangle(x=0, y=0, width=width, height=footer_height, color=BRAND_DARK)
    size = _fit_size(regular, settings.footer_text, width * 0.9, 9.5)
    _centered_text(page, settings.footer_text, font=regular, size=size, y=footer_height / 2 - 3.5, color=WHITE)


def draw_cover_page(
    output: OutputDocument,
    logo: Optional[ImageHandle] = None,
    settings: Optional[BinderSettings] = None,
) -> Page:
    """Append exactly one synthesized cover page to *output* and return it."""

    settings = settings or DEFAULT_SETTINGS
    bold = output.embed_standard_font(StandardFont.HELVETICA_BOLD)
    regular = output.embed_standard_font(StandardFont.HELVETICA)

    page = output.add_blank_page(COVER_WIDTH, COVER_HEIGHT)
    band_bottom = _draw_header(page, bold, regular, settings, logo)
    margin, gap, card_width, card_y = _draw_cards(page, bold, regular, band_bottom)
    pills_bottom = _draw_pills(page, bold, margin, gap, card_width, card_y - page.height * 0.04)
    _draw_panel(page, bold, margin, pills_bottom - page.height * 0.03)
    _draw_footer(page, regular, settings)

    LOGGER.debug("Synthesized cover page with %d drawing operation(s)", len(page.operations))
    return page


__all__ = ["COVER_WIDTH", "COVER_HEIGHT", "draw_cover_page"]
