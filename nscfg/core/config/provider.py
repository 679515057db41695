from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Protocol

import yaml

from nscfg.core.config.tables import (
    AUTO_DOC_KEY,
    ENV_KEY_ALIAS,
    ENV_KEY_PREDICATE,
    MODIFIER_BEHAVIOUR_KEY,
    PREDICATE_PLACEHOLDER,
)
from nscfg.core.errors import ConfigLoadError
from nscfg.core.model import ReleaseBehaviour

logger = logging.getLogger(__name__)


class ConfigProvider(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def keys(self) -> Iterator[str]: ...


class MappingConfigProvider:
    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def keys(self) -> Iterator[str]:
        return iter(self._values.keys())


class EnvConfigProvider:
    """Reads configuration from the process environment (or an injected mapping)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def get(self, key: str) -> Optional[str]:
        return self._environ.get(key)

    def keys(self) -> Iterator[str]:
        return iter(list(self._environ.keys()))


class ChainConfigProvider:
    """First provider returning a value wins."""

    def __init__(self, *providers: ConfigProvider) -> None:
        self._providers = providers

    def get(self, key: str) -> Optional[str]:
        for p in self._providers:
            v = p.get(key)
            if v is not None:
                return v
        return None

    def keys(self) -> Iterator[str]:
        seen: set[str] = set()
        for p in self._providers:
            for k in p.keys():
                if k not in seen:
                    seen.add(k)
                    yield k


def _scalar(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


def load_config_file(path: str | Path) -> MappingConfigProvider:
    """Load overrides from a YAML file.

    Format:
      aliases:
        <label>: "<condition>"
      predicates:
        <key>: "<template with one {}>"
      autodoc: true|false
      release_modifier_behaviour: panic|ignore

    Returns a provider keyed with the same namespaced keys as the environment.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigLoadError(
            code="E_CONFIG_FILE_NOT_FOUND",
            message="config file does not exist",
            path=str(p),
        )

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigLoadError(code="E_CONFIG_YAML_PARSE", message=str(e), path=str(p)) from e

    if raw is None:
        return MappingConfigProvider()
    if not isinstance(raw, dict):
        raise ConfigLoadError(
            code="E_CONFIG_INVALID",
            message="config file must be a mapping",
            path=str(p),
        )

    out: dict[str, str] = {}

    aliases = raw.get("aliases") or {}
    if not isinstance(aliases, dict):
        raise ConfigLoadError(
            code="E_CONFIG_INVALID", message="aliases must be a mapping", path=f"{p}:aliases"
        )
    for label, expansion in aliases.items():
        if not isinstance(label, str) or not label.strip():
            raise ConfigLoadError(
                code="E_CONFIG_INVALID",
                message="alias labels must be non-empty strings",
                path=f"{p}:aliases",
            )
        if not isinstance(expansion, str) or not expansion.strip():
            raise ConfigLoadError(
                code="E_CONFIG_INVALID",
                message=f"alias '{label}' must expand to a non-empty string",
                path=f"{p}:aliases.{label}",
            )
        out[f"{ENV_KEY_ALIAS}{label.strip()}"] = expansion.strip()

    predicates = raw.get("predicates") or {}
    if not isinstance(predicates, dict):
        raise ConfigLoadError(
            code="E_CONFIG_INVALID", message="predicates must be a mapping", path=f"{p}:predicates"
        )
    for key, template in predicates.items():
        if not isinstance(key, str) or not key.strip():
            raise ConfigLoadError(
                code="E_CONFIG_INVALID",
                message="predicate keys must be non-empty strings",
                path=f"{p}:predicates",
            )
        if not isinstance(template, str) or template.count(PREDICATE_PLACEHOLDER) != 1:
            raise ConfigLoadError(
                code="E_CONFIG_INVALID",
                message=f"predicate '{key}' must contain exactly one {PREDICATE_PLACEHOLDER} placeholder",
                path=f"{p}:predicates.{key}",
            )
        out[f"{ENV_KEY_PREDICATE}{key.strip()}"] = template

    if "autodoc" in raw:
        out[AUTO_DOC_KEY] = _scalar(raw["autodoc"])
    if "release_modifier_behaviour" in raw:
        out[MODIFIER_BEHAVIOUR_KEY] = _scalar(raw["release_modifier_behaviour"])

    logger.debug("loaded %d config entries from %s", len(out), p)
    return MappingConfigProvider(out)


def default_provider(config_file: str | None = None) -> ConfigProvider:
    """Environment only, or config file layered over the environment."""
    env = EnvConfigProvider()
    if not config_file:
        return env
    return ChainConfigProvider(load_config_file(config_file), env)


@dataclass(frozen=True)
class Settings:
    autodoc: bool = True
    release_behaviour: ReleaseBehaviour = "panic"
    debug: bool = True
    docsrs: bool = False


def is_autodoc(provider: ConfigProvider) -> bool:
    # Anything but an explicit "false" keeps autodoc on.
    return provider.get(AUTO_DOC_KEY) != "false"


def release_modifier_behaviour(provider: ConfigProvider) -> ReleaseBehaviour:
    return "ignore" if provider.get(MODIFIER_BEHAVIOUR_KEY) == "ignore" else "panic"


def load_settings(
    provider: ConfigProvider, *, debug: bool = True, docsrs: bool = False
) -> Settings:
    return Settings(
        autodoc=is_autodoc(provider),
        release_behaviour=release_modifier_behaviour(provider),
        debug=debug,
        docsrs=docsrs,
    )
