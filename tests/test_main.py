from __future__ import annotations

from pathlib import Path

import pytest

from three_body.app.main import main


def test_bad_timestep_is_a_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--timestep", "0"])

    assert exc_info.value.code == 2
    assert "timestep must be > 0" in capsys.readouterr().err


def test_bad_config_file_is_a_usage_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "broken.json"
    path.write_text('{"schema_version": 2}', encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(path)])

    assert exc_info.value.code == 2
    assert "schema_version must be 1" in capsys.readouterr().err


def test_missing_config_file_is_a_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(tmp_path / "missing.json")])

    assert exc_info.value.code == 2
