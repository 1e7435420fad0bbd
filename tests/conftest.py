from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from PIL import Image
from pypdf import PageObject, PdfReader, PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

STAMP = b"vtunotesforall"

PdfFactory = Callable[..., bytes]


def build_pdf(
    sizes: Sequence[tuple[float, float]],
    rotations: Sequence[int] | None = None,
    title: str | None = None,
) -> bytes:
    writer = PdfWriter()
    for index, (width, height) in enumerate(sizes):
        page = writer.add_blank_page(width=width, height=height)
        if rotations:
            page.rotation = rotations[index]
    if title is not None:
        writer.add_metadata({"/Title": title})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def page_content(page: PageObject) -> bytes:
    contents = page.get_contents()
    return b"" if contents is None else contents.get_data()


def stamp_count(page: PageObject) -> int:
    return page_content(page).count(STAMP)


def read(data: bytes) -> PdfReader:
    return PdfReader(io.BytesIO(data))


def widths(data: bytes) -> list[float]:
    return [float(page.mediabox.width) for page in read(data).pages]


def _image_bytes(fmt: str, size: tuple[int, int] = (40, 20)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture()
def pdf_factory() -> PdfFactory:
    def _create(pages: int = 1, width: float = 200, height: float = 200, **kwargs) -> bytes:
        return build_pdf([(width, height)] * pages, **kwargs)

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: PdfFactory) -> bytes:
    return pdf_factory(pages=3, width=612, height=792)


@pytest.fixture()
def png_bytes() -> bytes:
    return _image_bytes("PNG")


@pytest.fixture()
def jpeg_bytes() -> bytes:
    return _image_bytes("JPEG")


@pytest.fixture()
def gif_bytes() -> bytes:
    return _image_bytes("GIF")


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("pdfbinder")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
