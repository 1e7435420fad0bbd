from __future__ import annotations

import io

import pytest
from PIL import Image
from pypdf import PdfWriter

from conftest import build_pdf, read
from pdfbinder.backends import (
    DEFAULT_BACKEND,
    FontHandle,
    ImageHandle,
    PypdfBackend,
    StandardFont,
    TextOperation,
    create_document,
    parse_document,
)
from pdfbinder.exceptions import (
    IndexOutOfRangeError,
    ParseError,
    SerializationError,
    UnsupportedImageFormatError,
)
from pdfbinder.types import ImageKind, PdfMetadata


def test_parse_counts_pages(sample_pdf: bytes) -> None:
    document = parse_document(sample_pdf)

    assert document.page_count == 3
    assert document.page_indices() == [0, 1, 2]
    assert len(list(document.iter_pages())) == 3


@pytest.mark.parametrize("data", [b"", b"not a pdf at all", b"%PDF-1.4\n%broken"])
def test_parse_rejects_invalid_data(data: bytes) -> None:
    with pytest.raises(ParseError):
        PypdfBackend().parse(data)


def test_parse_accepts_empty_user_password(pdf_factory) -> None:
    reader = read(pdf_factory(pages=2))
    writer = PdfWriter(clone_from=reader)
    writer.encrypt(user_password="", owner_password="owner")
    buffer = io.BytesIO()
    writer.write(buffer)

    assert parse_document(buffer.getvalue()).page_count == 2


def test_parse_rejects_password_protected(pdf_factory) -> None:
    reader = read(pdf_factory(pages=1))
    writer = PdfWriter(clone_from=reader)
    writer.encrypt(user_password="secret", owner_password="owner")
    buffer = io.BytesIO()
    writer.write(buffer)

    with pytest.raises(ParseError):
        parse_document(buffer.getvalue())


def test_copy_pages_validates_every_index_first(sample_pdf: bytes) -> None:
    output = create_document()
    source = parse_document(sample_pdf)

    with pytest.raises(IndexOutOfRangeError):
        output.copy_pages(source, [0, 1, 3])
    with pytest.raises(IndexError):
        output.copy_pages(source, [-1])

    assert output.page_count == 0


def test_appended_pages_keep_order_and_size() -> None:
    source = parse_document(build_pdf([(100, 100), (200, 100), (300, 100)]))
    output = create_document()

    for page in output.copy_pages(source, [2, 0, 1]):
        output.append_page(page)

    assert [page.width for page in output.pages] == [300, 100, 200]
    assert [float(page.mediabox.width) for page in read(output.serialize()).pages] == [300, 100, 200]


def test_same_page_appended_twice_is_independent(sample_pdf: bytes) -> None:
    source = parse_document(sample_pdf)
    output = create_document()
    first, second = (output.append_page(page) for page in output.copy_pages(source, [0, 0]))

    second.rotate(90)

    assert first.rotation == 0
    reader = read(output.serialize())
    assert [page.rotation for page in reader.pages] == [0, 90]


def test_rotation_is_normalized_and_additive(sample_pdf: bytes) -> None:
    output = create_document()
    page = output.append_all(parse_document(sample_pdf))[0]

    assert page.rotate(-90) == 270
    for _ in range(4):
        page.rotate(90)
    assert page.rotation == 270
    assert page.rotate(450) == 0

    with pytest.raises(ValueError):
        page.rotation = 45


def test_serialize_only_once(sample_pdf: bytes) -> None:
    output = create_document()
    page = output.append_all(parse_document(sample_pdf))[0]
    font = output.embed_standard_font()

    output.serialize()

    assert output.is_serialized
    with pytest.raises(SerializationError):
        output.serialize()
    with pytest.raises(SerializationError):
        page.draw_text("late", x=0, y=0, size=10, font=font)
    with pytest.raises(SerializationError):
        output.add_blank_page(100, 100)
    with pytest.raises(SerializationError):
        output.set_metadata(PdfMetadata(title="late"))


def test_blank_page_has_requested_size() -> None:
    output = DEFAULT_BACKEND.create_empty()
    page = output.add_blank_page(595.28, 841.89)

    assert page.size == pytest.approx((595.28, 841.89))
    assert output.page_count == 1


def test_draw_text_records_operation() -> None:
    output = create_document()
    page = output.add_blank_page(200, 200)
    font = output.embed_standard_font(StandardFont.HELVETICA)

    page.draw_text("hello", x=10, y=20, size=12, font=font, opacity=0.5, rotate=30)

    assert page.operations == [
        TextOperation(text="hello", x=10, y=20, size=12, font="Helvetica", opacity=0.5, rotate=30)
    ]
    with pytest.raises(ValueError):
        page.draw_text("bad", x=0, y=0, size=12, font=font, opacity=1.5)


def test_drawings_are_rendered_into_page_content() -> None:
    output = create_document()
    page = output.add_blank_page(300, 300)
    font = output.embed_standard_font()
    page.draw_rectangle(x=10, y=10, width=50, height=20, color=None, border_color=None)
    page.draw_circle(x=100, y=100, radius=5)
    page.draw_path([(0, 0), (10, 10), (20, 0)])
    page.draw_text("marker", x=20, y=40, size=14, font=font)

    reader = read(output.serialize())

    assert b"(marker) Tj" in reader.pages[0].get_contents().get_data()


def test_embed_standard_font_rejects_unknown_family() -> None:
    output = create_document()

    with pytest.raises(SerializationError):
        output.embed_standard_font("Comic Sans MS")

    assert output.embed_standard_font("Helvetica-Bold") is output.embed_standard_font(StandardFont.HELVETICA_BOLD)


def test_font_metrics() -> None:
    font = FontHandle.standard(StandardFont.HELVETICA_BOLD)

    assert font.width_of_text_at_size("abc", 20) == pytest.approx(2 * font.width_of_text_at_size("abc", 10))
    assert font.height_at_size(10) > 0


def test_embed_image_reports_intrinsic_size(png_bytes: bytes, jpeg_bytes: bytes) -> None:
    output = create_document()

    png = output.embed_image(png_bytes, ImageKind.PNG)
    jpeg = output.embed_image(jpeg_bytes, ImageKind.JPEG)

    assert (png.width, png.height) == (40, 20)
    assert (jpeg.width, jpeg.height) == (40, 20)
    assert png.scale(0.5) == (20, 10)


@pytest.mark.parametrize("kind", [ImageKind.PNG, ImageKind.JPEG])
def test_embed_image_rejects_other_formats(gif_bytes: bytes, kind: ImageKind) -> None:
    with pytest.raises(UnsupportedImageFormatError):
        create_document().embed_image(gif_bytes, kind)


def test_embed_image_accepts_jpeg_with_mpf_segment() -> None:
    buffer = io.BytesIO()
    frames = [Image.new("RGB", (40, 20), (10, 120, 200)), Image.new("RGB", (40, 20), (200, 120, 10))]
    frames[0].save(buffer, format="MPO", save_all=True, append_images=frames[1:])
    output = create_document()
    page = output.add_blank_page(200, 200)

    image = output.embed_image(buffer.getvalue(), ImageKind.JPEG)
    page.draw_image(image, x=10, y=10, width=80, height=40)

    assert (image.width, image.height) == (40, 20)
    assert "/XObject" in read(output.serialize()).pages[0]["/Resources"]


def test_image_kind_must_match_data(png_bytes: bytes) -> None:
    with pytest.raises(UnsupportedImageFormatError):
        ImageHandle.decode(png_bytes, ImageKind.JPEG)
    with pytest.raises(UnsupportedImageFormatError):
        ImageHandle.decode(b"", ImageKind.PNG)
    with pytest.raises(UnsupportedImageFormatError):
        ImageHandle.decode(b"garbage", ImageKind.PNG)


def test_set_metadata_skips_blank_fields(sample_pdf: bytes) -> None:
    output = create_document()
    output.append_all(parse_document(sample_pdf))
    output.set_metadata(PdfMetadata(title="Notes", author="  "), creator="Binder")

    metadata = read(output.serialize()).metadata

    assert metadata.title == "Notes"
    assert metadata.creator == "Binder"
    assert metadata.author is None


def test_zero_page_document_is_allowed() -> None:
    empty = create_document().serialize()

    assert parse_document(empty).page_count == 0
