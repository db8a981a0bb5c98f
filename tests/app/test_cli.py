from __future__ import annotations

import logging
from ipaddress import ip_network
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from mmdbmerge.config import ConfigurationError
from mmdbmerge.domain.errors import IngestionError, InputValidationError
from mmdbmerge.ui import cli as cli_module

if TYPE_CHECKING:
    from collections.abc import Callable


class _Report:
    def __init__(self, output_path: Path) -> None:
        self.output_path = output_path
        self.merge = type("Merge", (), {"per_source": [object(), object()]})()


def _fake_merge(captured: dict[str, object]) -> Callable[..., _Report]:
    def fake(inputs: list[Path], **kwargs: object) -> _Report:
        captured["inputs"] = inputs
        captured.update(kwargs)
        output = kwargs["output_path"] or Path("combined.mmdb")
        return _Report(output)  # type: ignore[arg-type]

    return fake


def test_no_arguments_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 0
    assert "Input MMDB files" in capsys.readouterr().out


def test_inputs_and_output_are_forwarded(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "merge_databases", _fake_merge(captured))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["a.mmdb", "b.mmdb", "-o", "merged.mmdb"])

    assert excinfo.value.code == 0
    assert captured["inputs"] == [Path("a.mmdb"), Path("b.mmdb")]
    assert captured["output_path"] == Path("merged.mmdb")


def test_output_defaults_to_config(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "merge_databases", _fake_merge(captured))
    monkeypatch.setenv("MMDBMERGE_OUTPUT", "from-env.mmdb")

    with pytest.raises(SystemExit):
        cli_module.main(["a.mmdb", "b.mmdb"])

    assert captured["output_path"] is None
    assert captured["config"].output_path == Path("from-env.mmdb")  # type: ignore[attr-defined]


def test_debug_flag_enables_debug_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[int] = []
    monkeypatch.setattr(cli_module, "merge_databases", _fake_merge({}))
    monkeypatch.setattr(
        cli_module, "configure_logging", lambda *, level, **_: levels.append(level)
    )

    with pytest.raises(SystemExit):
        cli_module.main(["a.mmdb", "b.mmdb", "--debug"])

    assert levels == [logging.DEBUG]


def test_single_input_exits_with_usage_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    only = tmp_path / "only.mmdb"
    only.write_bytes(b"")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([str(only)])

    assert excinfo.value.code == 1
    assert "At least 2 input files are required" in caplog.text
    assert "usage:" in capsys.readouterr().err


def test_missing_input_exits_non_zero(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    present = tmp_path / "present.mmdb"
    present.write_bytes(b"")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([str(present), str(tmp_path / "missing.mmdb")])

    assert excinfo.value.code == 1
    assert "File not found" in caplog.text


def test_unknown_flag_exits_with_one(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "merge_databases", _fake_merge(captured))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["a.mmdb", "b.mmdb", "--bogus"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "unrecognized arguments: --bogus" in err
    assert captured == {}


def test_malformed_option_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "merge_databases", _fake_merge(captured))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["a.mmdb", "b.mmdb", "--output"])

    assert excinfo.value.code == 1
    assert captured == {}


@pytest.mark.parametrize(
    "error",
    [
        IngestionError(ip_network("9.9.9.0/24"), "feed", "boom"),
        ConfigurationError("MMDBMERGE_PROGRESS_INTERVAL must be an integer"),
        InputValidationError("File not found: x.mmdb"),
        RuntimeError("unexpected"),
    ],
)
def test_fatal_errors_exit_with_one(monkeypatch: pytest.MonkeyPatch, error: Exception) -> None:
    def failing(*_: object, **__: object) -> None:
        raise error

    monkeypatch.setattr(cli_module, "merge_databases", failing)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["a.mmdb", "b.mmdb"])

    assert excinfo.value.code == 1
