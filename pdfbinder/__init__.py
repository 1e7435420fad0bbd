"""PDF binding toolkit: merge behind a cover, watermark, edit and combine."""

from __future__ import annotations

__version__ = "1.0.0"

from . import backends, cover, editor, merge, watermark
from .cover import draw_cover_page
from .editor import (
    EditorPage,
    EditorSession,
    SourceId,
    SourceState,
    compile_pages,
    render_thumbnail,
    render_thumbnails,
)
from .exceptions import (
    ConfigurationError,
    IndexOutOfRangeError,
    MergeError,
    MissingSourceError,
    ParseError,
    PdfBinderError,
    SerializationError,
    UnsupportedImageFormatError,
)
from .merge import combine, merge_with_cover, process_batch, process_batch_file
from .settings import BinderSettings, load_settings
from .types import (
    RGB,
    STRICT_WATERMARK_CONFIG,
    BatchFailure,
    BatchResult,
    ImageKind,
    LogoImage,
    PdfMetadata,
    ProcessedFile,
    SourceFile,
    WatermarkConfig,
)
from .utils import output_filename
from .watermark import apply_watermark

__all__ = [
    "__version__",
    "backends",
    "cover",
    "editor",
    "merge",
    "watermark",
    "merge_with_cover",
    "process_batch",
    "process_batch_file",
    "combine",
    "compile_pages",
    "render_thumbnails",
    "render_thumbnail",
    "apply_watermark",
    "draw_cover_page",
    "output_filename",
    "load_settings",
    "BinderSettings",
    "EditorPage",
    "EditorSession",
    "SourceId",
    "SourceState",
    "RGB",
    "STRICT_WATERMARK_CONFIG",
    "WatermarkConfig",
    "LogoImage",
    "ImageKind",
    "PdfMetadata",
    "SourceFile",
    "ProcessedFile",
    "BatchFailure",
    "BatchResult",
    "PdfBinderError",
    "ParseError",
    "IndexOutOfRangeError",
    "UnsupportedImageFormatError",
    "MissingSourceError",
    "SerializationError",
    "MergeError",
    "ConfigurationError",
]
