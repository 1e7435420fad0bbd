"""Merge functionality for the :mod:`pdfbinder.merge` package.

Two product modes are supported:

* :func:`merge_with_cover` builds one output: an optional cover (supplied or
  synthesized) followed by every content file, each content page stamped with
  :data:`~pdfbinder.types.STRICT_WATERMARK_CONFIG`.
* :func:`process_batch_file` builds one output per content file with a
  caller-supplied watermark; :func:`process_batch` drives it over a list of
  files in order.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence, Union

from ..backends import DEFAULT_BACKEND, OutputDocument, PDFBackend
from ..cover import draw_cover_page
from ..exceptions import MergeError, PdfBinderError
from ..settings import DEFAULT_SETTINGS, BinderSettings
from ..types import (
    STRICT_WATERMARK_CONFIG,
    BatchFailure,
    BatchResult,
    LogoImage,
    PdfMetadata,
    ProcessedFile,
    SourceFile,
    WatermarkConfig,
)
from ..utils import ProgressCallback, ProgressReporter, output_filename
from ..watermark import embed_logo, watermark_pages

LOGGER = logging.getLogger("pdfbinder.merge")

PdfInput = Union[bytes, SourceFile]


def _describe(item: PdfInput, index: int) -> str:
    return item.name if isinstance(item, SourceFile) else f"content file {index + 1}"


def _data(item: PdfInput) -> bytes:
    return item.data if isinstance(item, SourceFile) else item


def _with_settings_text(config: WatermarkConfig, settings: BinderSettings) -> WatermarkConfig:
    if config.text:
        return config
    return replace(config, text=settings.watermark_text)


def _add_cover(
    output: OutputDocument,
    backend: PDFBackend,
    settings: BinderSettings,
    *,
    cover: Optional[PdfInput],
    use_default_cover: bool,
    logo: Optional[LogoImage],
) -> int:
    if cover is not None:
        pages = output.append_all(backend.parse(_data(cover)))
        LOGGER.debug("Added %d unwatermarked cover page(s)", len(pages))
        return len(pages)
    if use_default_cover:
        draw_cover_page(output, embed_logo(output, logo), settings)
        LOGGER.debug("Added synthesized cover page")
        return 1
    return 0


def merge_with_cover(
    content_files: Sequence[PdfInput],
    *,
    cover: Optional[PdfInput] = None,
    use_default_cover: bool = False,
    metadata: Optional[PdfMetadata] = None,
    logo: Optional[LogoImage] = None,
    progress_callback: Optional[ProgressCallback] = None,
    settings: Optional[BinderSettings] = None,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Merge *content_files* behind an optional cover into one PDF.

    Args:
        content_files: PDF buffers in output order.
        cover: Cover PDF copied verbatim and unwatermarked. Takes precedence
            over ``use_default_cover``.
        use_default_cover: Synthesize a one page cover when no cover is given.
        metadata: Title/author/subject written to the output.
        logo: Logo drawn on the synthesized cover only.
        progress_callback: Receives percentages in ``[0, 100]``.

    Raises:
        MergeError: If any input cannot be processed; no output is produced.
    """

    settings = settings or DEFAULT_SETTINGS
    backend = backend or DEFAULT_BACKEND
    report = ProgressReporter(progress_callback)

    files = list(content_files)
    if not files:
        raise MergeError("No content PDFs provided")

    try:
        output = backend.create_empty()
        font = output.embed_standard_font(settings.font)

        cover_pages = _add_cover(
            output,
            backend,
            settings,
            cover=cover,
            use_default_cover=use_default_cover,
            logo=logo,
        )
        report(5)

        config = _with_settings_text(STRICT_WATERMARK_CONFIG, settings)
        report(15)
        total = len(files)
        for index, item in enumerate(files):
            LOGGER.debug("Processing %s", _describe(item, index))
            pages = output.append_all(backend.parse(_data(item)))
            watermark_pages(pages, font, config)
            report(15 + (index + 1) * 80 / total)

        if metadata is not None:
            output.set_metadata(metadata, settings.creator)
        report(95)
        result = output.serialize()
    except MergeError:
        raise
    except PdfBinderError as exc:
        LOGGER.error("Merge failed: %s", exc)
        raise MergeError(f"Failed to process PDFs. Ensure files are valid. ({exc})") from exc

    report(100)
    LOGGER.info(
        "Merged %d content file(s) behind %d cover page(s) into %d page(s)",
        len(files),
        cover_pages,
        output.page_count,
    )
    return result


def process_batch_file(
    content: PdfInput,
    *,
    config: WatermarkConfig,
    cover: Optional[PdfInput] = None,
    metadata: Optional[PdfMetadata] = None,
    settings: Optional[BinderSettings] = None,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Return one PDF: unwatermarked *cover* pages, then stamped *content* pages.

    The logo in *config* is embedded before anything else, so an unsupported
    logo fails before any page is copied or drawn.
    """

    settings = settings or DEFAULT_SETTINGS
    backend = backend or DEFAULT_BACKEND

    output = backend.create_empty()
    logo = embed_logo(output, config.logo)
    font = output.embed_standard_font(settings.font)

    if cover is not None:
        output.append_all(backend.parse(_data(cover)))

    pages = output.append_all(backend.parse(_data(content)))
    watermark_pages(pages, font, _with_settings_text(config, settings), logo)

    if metadata is not None:
        output.set_metadata(metadata, settings.creator)
    return output.serialize()


def process_batch(
    files: Sequence[SourceFile],
    *,
    config: WatermarkConfig,
    cover: Optional[PdfInput] = None,
    metadata: Optional[PdfMetadata] = None,
    suffix: Optional[str] = None,
    progress_callback: Optional[ProgressCallback] = None,
    isolate_failures: bool = False,
    settings: Optional[BinderSettings] = None,
    backend: Optional[PDFBackend] = None,
) -> BatchResult:
    """Process every file in *files* in order with :func:`process_batch_file`.

    By default the first failure aborts the whole batch. With
    ``isolate_failures`` the failing file is recorded in
    :attr:`BatchResult.failures` and the remaining files are still processed.
    """

    settings = settings or DEFAULT_SETTINGS
    suffix = settings.filename_suffix if suffix is None else suffix
    report = ProgressReporter(progress_callback)
    result = BatchResult()

    total = len(files)
    for index, item in enumerate(files):
        report(index / total * 100)
        LOGGER.debug("Processing file %d of %d: %s", index + 1, total, item.name)
        try:
            data = process_batch_file(
                item,
                config=config,
                cover=cover,
                metadata=metadata,
                settings=settings,
                backend=backend,
            )
        except PdfBinderError as exc:
            if not isolate_failures:
                LOGGER.error("Batch aborted on %s: %s", item.name, exc)
                raise
            LOGGER.warning("Skipping %s: %s", item.name, exc)
            result.failures.append(BatchFailure(original_name=item.name, error=str(exc)))
            continue

        result.files.append(
            ProcessedFile(
                original_name=item.name,
                download_filename=output_filename(item.name, suffix),
                data=data,
            )
        )

    report(100)
    LOGGER.info("Processed %s", result)
    return result


__all__ = ["merge_with_cover", "process_batch_file", "process_batch"]
