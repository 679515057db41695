from __future__ import annotations

import logging

from nscfg.core.config.provider import ConfigProvider, MappingConfigProvider
from nscfg.core.config.tables import (
    DEFAULT_ALIASES,
    DEFAULT_PREDICATES,
    ENV_KEY_ALIAS,
    ENV_KEY_PREDICATE,
    PREDICATE_PLACEHOLDER,
)
from nscfg.core.errors import ErrorKind, expansion_error

logger = logging.getLogger(__name__)


class Resolver:
    """Two-tier lookup: config provider first, then the built-in tables."""

    def __init__(self, provider: ConfigProvider | None = None) -> None:
        self.provider: ConfigProvider = provider if provider is not None else MappingConfigProvider()

    def resolve_alias(self, label: str) -> str:
        label = label.strip()
        override = self.provider.get(f"{ENV_KEY_ALIAS}{label}")
        if override is not None:
            logger.debug("alias %s -> %s (config)", label, override)
            return override
        builtin = DEFAULT_ALIASES.get(label)
        if builtin is None:
            raise expansion_error(ErrorKind.ALIAS_NOT_FOUND, label)
        return builtin

    def resolve_predicate(self, tokens: str) -> str:
        """Resolve `label:key` into a literal predicate string."""
        if ":" not in tokens:
            raise expansion_error(ErrorKind.INVALID_CONFIGURATION_PREDICATE, tokens.strip())

        label, _, key = tokens.partition(":")
        label = label.strip()
        key = key.strip()

        template = self.provider.get(f"{ENV_KEY_PREDICATE}{key}")
        if template is None:
            template = DEFAULT_PREDICATES.get(key)
        if template is None:
            raise expansion_error(ErrorKind.INVALID_CONFIGURATION_PREDICATE, key)

        predicate = template.replace(PREDICATE_PLACEHOLDER, label)
        logger.debug("predicate %s -> %s", tokens, predicate)
        return predicate

    def aliases(self) -> dict[str, str]:
        return self._merged(DEFAULT_ALIASES, ENV_KEY_ALIAS)

    def predicates(self) -> dict[str, str]:
        return self._merged(DEFAULT_PREDICATES, ENV_KEY_PREDICATE)

    def _merged(self, builtins: dict[str, str], prefix: str) -> dict[str, str]:
        merged = dict(builtins)
        for key in self.provider.keys():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):]
            if not name:
                continue
            value = self.provider.get(key)
            if value is not None:
                merged[name] = value
        return merged
