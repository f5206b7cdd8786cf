from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs `main()` in-process with logging configuration stubbed out, and
checks exit codes and rendered output.
"""

import json
from unittest.mock import patch

import pytest

from vmdep.interface.cli import app


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the root logger untouched by the CLI bootstrap."""
    with patch("vmdep.interface.cli.app.configure_logging"):
        yield


def test_json_output(site_root, write_template, capsys) -> None:
    a = write_template("a.vm", "#parse('b.vm')")
    b = write_template("b.vm")

    code = app.main(["--use-defaults", "-r", str(site_root), "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert set(payload) == {a, b}
    assert payload[a]["children"] == {b: [[1, 0]]}


def test_human_output(site_root, write_template, capsys) -> None:
    write_template("a.vm", "#parse('missing.vm')")

    code = app.main(["--use-defaults", "-r", str(site_root)])

    out = capsys.readouterr().out
    assert code == 0
    assert "/a.vm [normal]" in out
    assert "/missing.vm [missing]" in out
    assert "missing: 1" in out


def test_variable_report_output(site_root, write_template, capsys) -> None:
    a = write_template("a.vm", "#parse(\"$x.vm\")")

    code = app.main(["--use-defaults", "-r", str(site_root), "-f", a, "--variable"])

    out = capsys.readouterr().out
    assert code == 0
    assert f"{a}  1:0" in out


def test_missing_root_exits_with_2(tmp_path, capsys) -> None:
    code = app.main(["--use-defaults", "-r", str(tmp_path / "nope")])
    assert code == 2
    assert "Root directory does not exist" in capsys.readouterr().err


def test_scan_failure_exits_with_1(site_root, write_template, capsys) -> None:
    write_template("a.vm")
    with patch("vmdep.interface.cli.app.run_scan", side_effect=PermissionError("denied")):
        code = app.main(["--use-defaults", "-r", str(site_root)])
    assert code == 1
    assert "denied" in capsys.readouterr().err


def test_dump_config(site_root, capsys) -> None:
    code = app.main(["--use-defaults", "-r", str(site_root), "--recursive", "--dump-config"])

    dumped = json.loads(capsys.readouterr().out)
    assert code == 0
    assert dumped["roots"] == [str(site_root)]
    assert dumped["recursive"] is True


def test_config_file_is_merged_under_cli(site_root, tmp_path, write_template, capsys) -> None:
    write_template("a.vm", "#cmsparse('b.vm')")
    conf = tmp_path / "conf.json"
    conf.write_text(json.dumps({"roots": [str(site_root)], "directives": ["cmsparse"]}), encoding="utf-8")

    code = app.main(["-c", str(conf), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert len(payload) == 2


def test_save_config_writes_file(site_root, tmp_path, capsys) -> None:
    conf = tmp_path / "saved.json"

    code = app.main(["--use-defaults", "-c", str(conf), "-r", str(site_root), "--save-config"])

    assert code == 0
    assert json.loads(conf.read_text(encoding="utf-8"))["roots"] == [str(site_root)]
