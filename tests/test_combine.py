from __future__ import annotations

import pytest

from conftest import build_pdf, read, stamp_count, widths
from pdfbinder import combine, process_batch
from pdfbinder.exceptions import ParseError
from pdfbinder.settings import BinderSettings
from pdfbinder.types import SourceFile, WatermarkConfig


@pytest.fixture()
def buffers() -> list[bytes]:
    return [
        build_pdf([(100, 100), (110, 100)]),
        build_pdf([(200, 100)], rotations=[180]),
        build_pdf([(300, 100), (310, 100), (320, 100)]),
    ]


def test_combine_concatenates_in_order(buffers: list[bytes]) -> None:
    data = combine(buffers)

    assert widths(data) == [100, 110, 200, 300, 310, 320]
    assert read(data).pages[2].rotation == 180


def test_combine_is_associative(buffers: list[bytes]) -> None:
    a, b, c = buffers

    left = combine([combine([a, b]), c])
    right = combine([a, combine([b, c])])

    assert widths(left) == widths(right) == widths(combine(buffers))


def test_combine_does_not_stamp_again() -> None:
    result = process_batch(
        [SourceFile("a.pdf", build_pdf([(200, 200)])), SourceFile("b.pdf", build_pdf([(300, 300)]))],
        config=WatermarkConfig(),
    )

    data = combine([item.data for item in result.files])

    assert [stamp_count(page) for page in read(data).pages] == [2, 2]


def test_combine_writes_creator() -> None:
    data = combine([build_pdf([(100, 100)])], settings=BinderSettings(creator="Combiner"))

    assert read(data).metadata.creator == "Combiner"


def test_combine_rejects_invalid_buffer() -> None:
    with pytest.raises(ParseError):
        combine([build_pdf([(100, 100)]), b""])
