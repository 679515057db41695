from pathlib import Path

from typer.testing import CliRunner

from nscfg.cli import app

runner = CliRunner()

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def test_aliases_command_lists_builtins():
    r = runner.invoke(app, ["aliases"])
    assert r.exit_code == 0, r.output
    assert "Aliases:" in r.output
    assert "- linux: linux:os" in r.output
    assert "- desktop: linux:os | windows:_ | macos:os" in r.output
    assert "- mobile: android:os | ios:os" in r.output


def test_predicates_command_with_config_file():
    r = runner.invoke(app, ["predicates", "--config", str(EXAMPLES / "nscfg.yaml")])
    assert r.exit_code == 0, r.output
    assert "Predicates:" in r.output
    assert '- ar: target_arch = "{}"' in r.output
    assert '- sn: sanitize = "{}"' in r.output


def test_tables_with_missing_config_file(tmp_path: Path):
    r = runner.invoke(app, ["aliases", "--config", str(tmp_path / "nope.yaml")])
    assert r.exit_code == 1
    assert "E_CONFIG_FILE_NOT_FOUND" in r.output
