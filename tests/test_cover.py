from __future__ import annotations

import pytest

from conftest import page_content, read
from pdfbinder.backends import CircleOperation, ImageOperation, PathOperation, RectangleOperation, create_document
from pdfbinder.cover import COVER_HEIGHT, COVER_WIDTH, draw_cover_page, synthesizer
from pdfbinder.settings import BinderSettings
from pdfbinder.types import ImageKind


def test_cover_is_exactly_one_a4_page() -> None:
    output = create_document()

    page = draw_cover_page(output)

    assert output.page_count == 1
    assert page.size == pytest.approx((COVER_WIDTH, COVER_HEIGHT))

    reader = read(output.serialize())
    assert len(reader.pages) == 1
    assert float(reader.pages[0].mediabox.width) == pytest.approx(595.28)
    assert float(reader.pages[0].mediabox.height) == pytest.approx(841.89)


def test_cover_draws_vector_bullets_and_icons() -> None:
    output = create_document()

    page = draw_cover_page(output)

    assert sum(isinstance(op, CircleOperation) for op in page.operations) >= 4
    assert sum(isinstance(op, PathOperation) for op in page.operations) == 6
    assert not any(isinstance(op, ImageOperation) for op in page.operations)


def test_cover_stays_inside_page() -> None:
    output = create_document()

    page = draw_cover_page(output)

    for operation in page.operations:
        if hasattr(operation, "width") and hasattr(operation, "height"):
            assert operation.x >= 0
            assert operation.y >= 0
            assert operation.x + operation.width <= COVER_WIDTH + 0.01
            assert operation.y + operation.height <= COVER_HEIGHT + 0.01


def _shapes(page) -> list[tuple[float, ...]]:
    shapes = []
    for operation in page.operations:
        if isinstance(operation, RectangleOperation):
            shapes.append((operation.x, operation.y, operation.width, operation.height))
        elif isinstance(operation, PathOperation):
            shapes.append(tuple(value for point in operation.points for value in point))
    return shapes


def test_cover_shapes_scale_with_page_size(monkeypatch: pytest.MonkeyPatch) -> None:
    regular = draw_cover_page(create_document())
    monkeypatch.setattr(synthesizer, "COVER_WIDTH", COVER_WIDTH * 2)
    monkeypatch.setattr(synthesizer, "COVER_HEIGHT", COVER_HEIGHT * 2)

    doubled = draw_cover_page(create_document())

    expected = [tuple(value * 2 for value in shape) for shape in _shapes(regular)]
    assert len(expected) == len(_shapes(doubled))
    for actual, wanted in zip(_shapes(doubled), expected):
        assert actual == pytest.approx(wanted)


def test_cover_with_logo(png_bytes: bytes) -> None:
    output = create_document()
    logo = output.embed_image(png_bytes, ImageKind.PNG)

    page = draw_cover_page(output, logo)

    [image] = [op for op in page.operations if isinstance(op, ImageOperation)]
    assert image.x + image.width / 2 == pytest.approx(COVER_WIDTH / 2)
    assert image.y + image.height <= COVER_HEIGHT


def test_cover_uses_configured_title() -> None:
    output = create_document()
    settings = BinderSettings(cover_title="PHYSICS NOTES")

    draw_cover_page(output, settings=settings)

    content = page_content(read(output.serialize()).pages[0])
    assert b"(PHYSICS NOTES) Tj" in content
