from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional

import typer

from nscfg.core.config.cache import docsrs_enabled
from nscfg.core.config.provider import ConfigProvider, Settings, default_provider, load_settings
from nscfg.core.errors import ConfigLoadError, ExpansionError, NscfgError
from nscfg.core.expand.expand_cfg import match_cfg, meta_cfg, target_cfg
from nscfg.core.model import Scope
from nscfg.core.resolve.resolver import Resolver

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolution steps to stderr"),
) -> None:
    """nscfg: expand simplified cfg arms into conditional compilation predicates."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return


def _read_input(path: str) -> str:
    if path == "-":
        return typer.get_text_stream("stdin").read()
    p = Path(path)
    if not p.exists():
        raise ConfigLoadError(
            code="E_FILE_NOT_FOUND",
            message="file does not exist",
            path=str(p),
        )
    return p.read_text(encoding="utf-8")


def _run(
    command: str,
    fmt: str,
    config_file: Optional[str],
    produce: Callable[[ConfigProvider], str],
) -> None:
    if fmt not in ("text", "json"):
        err = ExpansionError(
            code="E_UNKNOWN_FORMAT",
            message=f"unknown format: {fmt} (choose one of: text, json)",
            path="format",
        )
        _print_errors([err])
        raise typer.Exit(code=2)

    def _emit_json(ok: bool, errors: list[NscfgError], exit_code: int, output: str | None) -> None:
        payload = {
            "tool": "nscfg",
            "command": command,
            "ok": ok,
            "error_count": len(errors),
            "errors": [_to_item(e) for e in errors],
            "output": output,
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=exit_code)

    try:
        provider = default_provider(config_file)
        output = produce(provider)
    except ConfigLoadError as e:
        if fmt == "json":
            _emit_json(False, [e], 1, None)
        _print_errors([e])
        raise typer.Exit(code=1)
    except ExpansionError as e:
        if fmt == "json":
            _emit_json(False, [e], 2, None)
        _print_errors([e])
        raise typer.Exit(code=2)

    if fmt == "json":
        _emit_json(True, [], 0, output)
    typer.echo(output, nl=False)


def _settings(provider: ConfigProvider, release: bool, docsrs: Optional[bool]) -> Settings:
    probed = docsrs if docsrs is not None else docsrs_enabled()
    return load_settings(provider, debug=not release, docsrs=probed)


@app.command("target")
def target(
    path: str = typer.Argument(..., help="File holding the arm list, or - for stdin"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML file with alias/predicate overrides"),
    release: bool = typer.Option(False, "--release", help="Expand as a release build"),
    docsrs: Optional[bool] = typer.Option(None, "--docsrs/--no-docsrs", help="Override the manifest docs.rs probe"),
    scope: str = typer.Option("item", "--scope", help="Invocation scope: item|function"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Expand an item-level arm list: every matching arm is kept."""
    if scope not in ("item", "function"):
        _print_errors(
            [
                ExpansionError(
                    code="E_UNKNOWN_SCOPE",
                    message=f"unknown scope: {scope} (choose one of: item, function)",
                    path="scope",
                )
            ]
        )
        raise typer.Exit(code=2)

    def produce(provider: ConfigProvider) -> str:
        text = _read_input(path)
        settings = _settings(provider, release, docsrs)
        sc: Scope = "function" if scope == "function" else "item"
        return target_cfg(text, provider=provider, settings=settings, scope=sc)

    _run("target", format, config_file, produce)


@app.command("match")
def match_cmd(
    path: str = typer.Argument(..., help="File holding the arm list, or - for stdin"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML file with alias/predicate overrides"),
    release: bool = typer.Option(False, "--release", help="Expand as a release build"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Expand a function-scoped arm list: first match wins, `_` is mandatory."""

    def produce(provider: ConfigProvider) -> str:
        text = _read_input(path)
        settings = _settings(provider, release, False)
        return match_cfg(text, provider=provider, settings=settings)

    _run("match", format, config_file, produce)


@app.command("meta")
def meta(
    condition: str = typer.Argument(..., help="Condition guarding the item, e.g. 'linux | windows'"),
    path: str = typer.Argument(..., help="File holding the item, or - for stdin"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML file with alias/predicate overrides"),
    release: bool = typer.Option(False, "--release", help="Expand as a release build"),
    docsrs: Optional[bool] = typer.Option(None, "--docsrs/--no-docsrs", help="Override the manifest docs.rs probe"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Expand the single-predicate attribute form."""

    def produce(provider: ConfigProvider) -> str:
        item = _read_input(path)
        settings = _settings(provider, release, docsrs)
        return meta_cfg(condition, item, provider=provider, settings=settings)

    _run("meta", format, config_file, produce)


@app.command("aliases")
def aliases(
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML file with alias/predicate overrides"),
) -> None:
    """List available aliases (built-ins merged with overrides)."""
    resolver = _resolver_or_exit(config_file)
    typer.echo("Aliases:")
    for name, expansion in resolver.aliases().items():
        typer.echo(f"- {name}: {expansion}")


@app.command("predicates")
def predicates(
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML file with alias/predicate overrides"),
) -> None:
    """List available predicate keys (built-ins merged with overrides)."""
    resolver = _resolver_or_exit(config_file)
    typer.echo("Predicates:")
    for key, template in resolver.predicates().items():
        typer.echo(f"- {key}: {template}")


def _resolver_or_exit(config_file: Optional[str]) -> Resolver:
    try:
        return Resolver(default_provider(config_file))
    except ConfigLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)


def _to_item(e: NscfgError) -> dict:
    source = "config" if isinstance(e, ConfigLoadError) else "expand"
    return {
        "code": e.code,
        "message": e.message,
        "token": e.token,
        "path": e.path,
        "severity": "error",
        "source": source,
    }


def _print_errors(errors: list[NscfgError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="nscfg")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
