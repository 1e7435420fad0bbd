from __future__ import annotations

from pathlib import Path

import pytest

from pdfbinder.exceptions import ConfigurationError
from pdfbinder.settings import (
    DEFAULT_SETTINGS,
    BinderSettings,
    load_settings,
    settings_from_env,
    settings_from_file,
)


def test_defaults() -> None:
    settings = load_settings(environ={})

    assert settings == DEFAULT_SETTINGS
    assert settings.watermark_text == "vtunotesforall"
    assert settings.creator == "VTU Notes Merging System"
    assert settings.filename_suffix == "vtunotesforall"
    assert settings.thumbnail_scale == 0.3
    assert settings.font == "Helvetica-Bold"


def test_file_then_environment(tmp_path: Path) -> None:
    config = tmp_path / "pdfbinder.toml"
    config.write_text(
        '[pdfbinder]\nwatermark_text = "fromfile"\ncreator = "File Creator"\nthumbnail_scale = 0.5\n',
        encoding="utf-8",
    )

    settings = load_settings(config, environ={"PDFBINDER_CREATOR": "Env Creator", "OTHER": "x"})

    assert settings.watermark_text == "fromfile"
    assert settings.creator == "Env Creator"
    assert settings.thumbnail_scale == 0.5


def test_environment_values_are_coerced() -> None:
    settings = load_settings(environ={"PDFBINDER_THUMBNAIL_SCALE": "0.6"})

    assert settings.thumbnail_scale == pytest.approx(0.6)


def test_env_ignores_unknown_names() -> None:
    assert settings_from_env({"PDFBINDER_UNKNOWN": "1", "PDFBINDER_FONT": "Courier"}) == {"font": "Courier"}


def test_missing_table_gives_defaults(tmp_path: Path) -> None:
    config = tmp_path / "empty.toml"
    config.write_text("[other]\nvalue = 1\n", encoding="utf-8")

    assert settings_from_file(config) == {}
    assert load_settings(config, environ={}) == DEFAULT_SETTINGS


@pytest.mark.parametrize(
    "content",
    [
        "[pdfbinder]\nunknown_key = 1\n",
        "[pdfbinder]\nthumbnail_scale = \"big\"\n",
        "[pdfbinder]\nthumbnail_scale = 5.0\n",
        "[pdfbinder]\nwatermark_text = \"  \"\n",
        "[pdfbinder]\nfont = \"Comic-Sans\"\n",
        "[pdfbinder\nbroken",
        "pdfbinder = 3\n",
    ],
)
def test_invalid_files_raise(tmp_path: Path, content: str) -> None:
    config = tmp_path / "bad.toml"
    config.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_settings(config, environ={})


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        settings_from_file(tmp_path / "absent.toml")


def test_from_dict_and_merged() -> None:
    settings = BinderSettings.from_dict({"thumbnail_scale": 1})

    assert settings.thumbnail_scale == 1.0
    assert settings.merged({"font": "Times-Roman"}).font == "Times-Roman"
    with pytest.raises(ConfigurationError):
        BinderSettings(thumbnail_scale=0)
    with pytest.raises(ConfigurationError):
        load_settings(environ={"PDFBINDER_FONT": "Comic-Sans"})
