from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from tell_me_more.cli import main
from tell_me_more.types import Description, Settings


@pytest.fixture
def services():
    """Replace both remote services with mocks."""
    describer = Mock()
    describer.describe.return_value = Description(text="The YouTube home page")
    suggester = Mock()
    suggester.suggest.return_value = "youtube homepage"
    with (
        patch("tell_me_more.cli.get_describer", return_value=describer),
        patch("tell_me_more.cli.get_suggester", return_value=suggester),
    ):
        yield describer, suggester


def test_cli_renames_confirmed_files(tmp_path: Path, services) -> None:
    describer, _ = services
    (tmp_path / "Screenshot_2024.png").write_bytes(b"png")
    (tmp_path / "vacation.png").write_bytes(b"png")

    result = CliRunner().invoke(main, [str(tmp_path)], input="Y\n")

    assert result.exit_code == 0, result.output
    assert "Suggested name: youtube homepage" in result.output
    assert sorted(p.name for p in tmp_path.iterdir()) == ["vacation.png", "youtube_homepage.png"]
    describer.describe.assert_called_once_with(tmp_path / "Screenshot_2024.png")


def test_cli_declined(tmp_path: Path, services) -> None:
    (tmp_path / "dalle cat.png").write_bytes(b"png")

    result = CliRunner().invoke(main, [str(tmp_path)], input="n\n")

    assert result.exit_code == 0, result.output
    assert (tmp_path / "dalle cat.png").exists()
    assert "0 renamed, 1 skipped" in result.output


def test_cli_end_of_input_skips(tmp_path: Path, services) -> None:
    (tmp_path / "dalle cat.png").write_bytes(b"png")

    result = CliRunner().invoke(main, [str(tmp_path)], input="")

    assert result.exit_code == 0, result.output
    assert (tmp_path / "dalle cat.png").exists()


def test_cli_rename_failure_exits_nonzero(tmp_path: Path, services) -> None:
    (tmp_path / "screenshot.png").write_bytes(b"png")

    with patch.object(Path, "rename", side_effect=OSError("read-only file system")):
        result = CliRunner().invoke(main, [str(tmp_path)], input="y\n")

    assert result.exit_code == 1
    assert "read-only file system" in result.output


def test_cli_traversal_failure_exits_nonzero(tmp_path: Path, services) -> None:
    with patch.object(Path, "iterdir", side_effect=PermissionError("permission denied")):
        result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 1
    assert "Error walking the path" in result.output


def test_cli_requires_existing_directory(tmp_path: Path, services) -> None:
    result = CliRunner().invoke(main, [str(tmp_path / "missing")])
    assert result.exit_code == 2

    (tmp_path / "screenshot.png").write_bytes(b"png")
    result = CliRunner().invoke(main, [str(tmp_path / "screenshot.png")])
    assert result.exit_code == 2

    result = CliRunner().invoke(main, [])
    assert result.exit_code == 2


def test_cli_unknown_describer(tmp_path: Path) -> None:
    with patch("tell_me_more.generators.llm.get_model", return_value=Mock()):
        result = CliRunner().invoke(main, [str(tmp_path)], env={"TELL_ME_MORE_DESCRIBER": "telepathy"})
    assert result.exit_code == 1
    assert "Unknown describer" in result.output


def test_cli_unknown_log_level(tmp_path: Path, services) -> None:
    result = CliRunner().invoke(main, [str(tmp_path)], env={"TELL_ME_MORE_LOG_LEVEL": "chatty"})
    assert result.exit_code == 1
    assert "Unknown log level" in result.output


def test_settings_from_env() -> None:
    assert Settings.from_env({}) == Settings()

    settings = Settings.from_env(
        {
            "TELL_ME_MORE_DESCRIBER": " Labels ",
            "TELL_ME_MORE_LABELS_MODEL": "gpt-4o",
            "TELL_ME_MORE_SUGGESTION_MODEL": "gpt-4o-mini",
            "TELL_ME_MORE_LOG_LEVEL": "debug",
        }
    )
    assert settings.describer == "labels"
    assert settings.labels_model == "gpt-4o"
    assert settings.suggestion_model == "gpt-4o-mini"
    assert settings.log_level == "DEBUG"
    assert settings.description_model == "gemini-2.5-flash"
