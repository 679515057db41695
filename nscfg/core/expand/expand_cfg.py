from __future__ import annotations

import logging

from nscfg.core.assemble.assemble_arms import assemble_match, assemble_target
from nscfg.core.config.cache import docsrs_enabled
from nscfg.core.config.provider import ConfigProvider, EnvConfigProvider, Settings, load_settings
from nscfg.core.emit.dialect import RUST_DIALECT, Dialect
from nscfg.core.emit.emit_code import emit_match, emit_target
from nscfg.core.model import ExpressionNode, Scope
from nscfg.core.parse.arms import CONTENT_SEPARATOR, split_arms
from nscfg.core.parse.expression import ExpressionBuilder
from nscfg.core.resolve.resolver import Resolver

logger = logging.getLogger(__name__)


def _context(
    provider: ConfigProvider | None, settings: Settings | None
) -> tuple[ExpressionBuilder, Settings]:
    p = provider if provider is not None else EnvConfigProvider()
    s = settings if settings is not None else load_settings(p, docsrs=docsrs_enabled())
    return ExpressionBuilder(Resolver(p)), s


def target_cfg(
    text: str,
    *,
    provider: ConfigProvider | None = None,
    settings: Settings | None = None,
    scope: Scope = "item",
    dialect: Dialect = RUST_DIALECT,
) -> str:
    builder, s = _context(provider, settings)
    arms = assemble_target(split_arms(text), builder, s, scope=scope)
    logger.debug("target: %d arms", len(arms))
    return emit_target(arms, docsrs=s.docsrs, dialect=dialect)


def match_cfg(
    text: str,
    *,
    provider: ConfigProvider | None = None,
    settings: Settings | None = None,
    dialect: Dialect = RUST_DIALECT,
) -> str:
    builder, s = _context(provider, settings)
    arms = assemble_match(split_arms(text), builder, s)
    logger.debug("match: %d arms", len(arms))
    return emit_match(arms, dialect=dialect)


def meta_cfg(
    attr: str,
    item: str,
    *,
    provider: ConfigProvider | None = None,
    settings: Settings | None = None,
    dialect: Dialect = RUST_DIALECT,
) -> str:
    """Attribute form: `attr` guards the single `item`."""
    text = f"{attr} {CONTENT_SEPARATOR} {{\n{item}\n}}"
    return target_cfg(text, provider=provider, settings=settings, dialect=dialect)


def parse_condition(condition: str, provider: ConfigProvider | None = None) -> ExpressionNode:
    """Resolve a single condition into its expression tree."""
    p = provider if provider is not None else EnvConfigProvider()
    return ExpressionBuilder(Resolver(p)).build(condition)
