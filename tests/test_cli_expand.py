from pathlib import Path

from typer.testing import CliRunner

from nscfg.cli import app

runner = CliRunner()

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def test_cli_target_matches_expected():
    r = runner.invoke(app, ["target", str(EXAMPLES / "target-desktop.rs.in"), "--no-docsrs"])
    assert r.exit_code == 0, r.output
    assert r.stdout == (EXAMPLES / "target-desktop.expected.rs").read_text(encoding="utf-8")


def test_cli_target_from_stdin_with_docsrs():
    r = runner.invoke(app, ["target", "-", "--docsrs"], input="unix => { fn a() {} }\n")
    assert r.exit_code == 0, r.output
    assert r.stdout.splitlines() == [
        "#[cfg(any(doc, unix))]",
        "#[cfg_attr(docsrs, doc(cfg(unix)))]",
        "fn a() {}",
    ]


def test_cli_match_matches_expected():
    r = runner.invoke(app, ["match", str(EXAMPLES / "match-os.rs.in")])
    assert r.exit_code == 0, r.output
    assert r.stdout == (EXAMPLES / "match-os.expected.rs").read_text(encoding="utf-8")


def test_cli_meta(tmp_path: Path):
    item = tmp_path / "item.rs"
    item.write_text("pub fn foo() {}\n", encoding="utf-8")
    r = runner.invoke(app, ["meta", "windows | unix | macos", str(item), "--no-docsrs"])
    assert r.exit_code == 0, r.output
    assert r.stdout == '#[cfg(any(doc, any(windows, unix, target_os = "macos")))]\npub fn foo() {}\n'


def test_cli_config_file_overrides(tmp_path: Path):
    arms = tmp_path / "arms.rs"
    arms.write_text("nix & address:sn => { fn a() {} }", encoding="utf-8")
    r = runner.invoke(
        app,
        ["target", str(arms), "--config", str(EXAMPLES / "nscfg.yaml"), "--no-docsrs"],
    )
    assert r.exit_code == 0, r.output
    assert r.stdout.splitlines()[0] == (
        '#[cfg(any(doc, all(any(target_os = "linux", target_os = "macos"), sanitize = "address")))]'
    )


def test_cli_expansion_error_exit_code():
    r = runner.invoke(app, ["target", "-", "--no-docsrs"], input="linux windows => { fn foo() {} },")
    assert r.exit_code == 2
    assert "MissingOperator" in r.output


def test_cli_release_modifier():
    r = runner.invoke(app, ["match", "-", "--release"], input="+ linux => 1, _ => 2")
    assert r.exit_code == 2
    assert "ModifierPanicRelease" in r.output


def test_cli_target_in_function_scope():
    r = runner.invoke(app, ["target", "-", "--scope", "function", "--no-docsrs"], input="linux => {}")
    assert r.exit_code == 2
    assert "TargetInFunction" in r.output


def test_cli_unknown_scope():
    r = runner.invoke(app, ["target", "-", "--scope", "module"], input="linux => {}")
    assert r.exit_code == 2
    assert "E_UNKNOWN_SCOPE" in r.output


def test_cli_missing_input_file(tmp_path: Path):
    r = runner.invoke(app, ["match", str(tmp_path / "nope.rs")])
    assert r.exit_code == 1
    assert "E_FILE_NOT_FOUND" in r.output


def test_cli_missing_config_file(tmp_path: Path):
    r = runner.invoke(
        app, ["match", "-", "--config", str(tmp_path / "nope.yaml")], input="_ => 1"
    )
    assert r.exit_code == 1
    assert "E_CONFIG_FILE_NOT_FOUND" in r.output
