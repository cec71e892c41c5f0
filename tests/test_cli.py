import io
import json

from rich.console import Console
from typer.testing import CliRunner

from cli_compat import main
from cli_compat.main import app

runner = CliRunner()


def test_cli_help_runs():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for cmd in ["status", "list", "removable", "validate"]:
        assert cmd in result.stdout


def test_status_warns_during_grace_period(registry_file):
    result = runner.invoke(
        app, ["status", "op log --no-graph-legacy", "-R", str(registry_file), "--release", "12"]
    )
    assert result.exit_code == 0, result.stdout
    assert "warn_and_allow" in result.stdout
    assert "Warning:" in result.output


def test_status_refused_exits_nonzero(registry_file):
    result = runner.invoke(
        app, ["status", "op log --no-graph-legacy", "-R", str(registry_file), "--release", "16"]
    )
    assert result.exit_code == 1
    assert "refused" in result.stdout
    assert "Error:" in result.output


def test_status_unknown_feature_is_active(registry_file):
    result = runner.invoke(app, ["status", "log", "-R", str(registry_file), "-r", "99"])
    assert result.exit_code == 0
    assert "active" in result.stdout


def test_status_json_with_gate_flag(registry_file):
    args = ["status", "backend.libgit2", "-R", str(registry_file), "-r", "27", "--json"]
    closed = runner.invoke(app, args)
    assert closed.exit_code == 1
    assert json.loads(closed.stdout)["allowed"] is False

    opened = runner.invoke(app, args + ["--flag", "legacy-backend"])
    assert opened.exit_code == 0, opened.stdout
    data = json.loads(opened.stdout)
    assert data["state"] == "refused"
    assert data["via_gate"] is True
    assert data["gated_behind"] == "legacy-backend"


def test_status_release_from_host_version(registry_file):
    result = runner.invoke(
        app,
        ["status", "debug clear-predecessors", "-R", str(registry_file),
         "--host-version", "0.6.2", "--json"],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["release"] == 6


def test_status_release_from_environment(registry_file, monkeypatch):
    monkeypatch.setenv("CLI_COMPAT_RELEASE", "7")
    monkeypatch.setenv("CLI_COMPAT_REGISTRY_FILE", str(registry_file))
    result = runner.invoke(app, ["status", "debug clear-predecessors", "--json"])
    assert result.exit_code == 1
    assert json.loads(result.stdout)["state"] == "refused"


def test_missing_release_is_a_usage_error(registry_file):
    result = runner.invoke(app, ["status", "log", "-R", str(registry_file)])
    assert result.exit_code == 2
    assert "Either release or version must be set" in result.output


def test_list_json(registry_file):
    result = runner.invoke(app, ["list", "-R", str(registry_file), "-r", "12", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["release"] == 12
    states = {row["id"]: row["state"] for row in data["records"]}
    assert states["op log --no-graph-legacy"] == "warn_and_allow"
    assert states["legacy-backend"] == "active"
    assert states["fetch.ssh-agent"] == "warn_and_allow"
    assert states["backend.libgit2"] == "active"


def test_list_table(registry_file):
    result = runner.invoke(app, ["list", "-R", str(registry_file), "-r", "12"])
    assert result.exit_code == 0
    assert "Deprecations at release 12" in result.stdout


def test_removable(registry_file):
    result = runner.invoke(app, ["removable", "-R", str(registry_file), "-r", "30"])
    assert result.exit_code == 0
    lines = result.stdout.split("\n")
    assert "backend.libgit2" in lines
    assert "legacy-backend" in lines
    assert "fetch.ssh-agent" not in lines


def test_removable_nothing(registry_file):
    result = runner.invoke(app, ["removable", "-R", str(registry_file), "-r", "1"])
    assert result.exit_code == 0
    assert "Nothing to remove" in result.stdout


def test_validate_ok(registry_file):
    result = runner.invoke(app, ["validate", str(registry_file)])
    assert result.exit_code == 0
    assert "5 records" in result.stdout


def test_validate_reports_invalid_record(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(
        "features:\n  - id: x\n    tier: niche\n    deprecated_at: 4\n    removal_at: 2\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_warnings_and_errors_go_to_stderr(registry_file, monkeypatch):
    out, err = io.StringIO(), io.StringIO()
    monkeypatch.setattr(main, "console", Console(file=out))
    monkeypatch.setattr(main, "err_console", Console(file=err))

    runner.invoke(app, ["status", "op log --no-graph-legacy", "-R", str(registry_file), "-r", "12"])
    assert "warn_and_allow" in out.getvalue()
    assert "Warning:" in err.getvalue()
    assert "Warning:" not in out.getvalue()

    refused = runner.invoke(
        app, ["status", "op log --no-graph-legacy", "-R", str(registry_file), "-r", "16"]
    )
    assert refused.exit_code == 1
    assert "Error:" in err.getvalue()
    assert "Error:" not in out.getvalue()


def test_unknown_log_format_is_rejected(registry_file):
    result = runner.invoke(
        app, ["list", "-R", str(registry_file), "-r", "12", "--log-format", "xml"]
    )
    assert result.exit_code == 2
    assert "Log format" in result.output


def test_unknown_log_level_from_environment_is_rejected(registry_file, monkeypatch):
    monkeypatch.setenv("CLI_COMPAT_LOG_LEVEL", "LOUD")
    result = runner.invoke(app, ["list", "-R", str(registry_file), "-r", "12"])
    assert result.exit_code == 2
    assert "Unknown log level: LOUD" in result.output


def test_validate_reports_undecodable_file(tmp_path):
    path = tmp_path / "latin.yaml"
    path.write_bytes(b"features:\n  - id: \xff\xfe\n")
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 1
    assert "FAIL" in result.output
