from __future__ import annotations

from pathlib import Path

import pytest

from docxedit.config import Settings, load_settings
from docxedit.errors import ConfigError


def test_defaults() -> None:
    settings = Settings()

    assert settings.debounce_seconds == 0.5
    assert settings.large_entry_threshold == 100_000
    assert settings.compression_level == 9
    assert settings.output_suffix == "_modified"


def test_from_env_overrides() -> None:
    settings = Settings.from_env(
        {
            "DOCXEDIT_DEBOUNCE_SECONDS": "0.2",
            "DOCXEDIT_LARGE_ENTRY_THRESHOLD": "5000",
            "DOCXEDIT_COMPRESSION_LEVEL": "6",
            "DOCXEDIT_OUTPUT_SUFFIX": "_edited",
            "UNRELATED": "ignored",
        }
    )

    assert settings == Settings(
        debounce_seconds=0.2,
        large_entry_threshold=5000,
        compression_level=6,
        output_suffix="_edited",
    )


def test_blank_values_fall_back_to_defaults() -> None:
    assert Settings.from_env({"DOCXEDIT_COMPRESSION_LEVEL": "  "}) == Settings()


def test_invalid_number_raises() -> None:
    with pytest.raises(ConfigError, match="DOCXEDIT_LARGE_ENTRY_THRESHOLD"):
        Settings.from_env({"DOCXEDIT_LARGE_ENTRY_THRESHOLD": "lots"})


@pytest.mark.parametrize(
    "kwargs",
    [{"compression_level": 12}, {"debounce_seconds": -1.0}, {"large_entry_threshold": -5}],
)
def test_out_of_range_values_raise(kwargs: dict) -> None:
    with pytest.raises(ConfigError):
        Settings(**kwargs)


def test_load_settings_reads_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCXEDIT_DEBOUNCE_SECONDS", "")
    monkeypatch.delenv("DOCXEDIT_DEBOUNCE_SECONDS")
    env_file = tmp_path / ".env"
    env_file.write_text("DOCXEDIT_DEBOUNCE_SECONDS=0.25\n", encoding="utf-8")

    assert load_settings(env_file).debounce_seconds == 0.25
