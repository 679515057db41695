from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from nscfg.core.config.provider import Settings
from nscfg.core.config.tables import DOC_ALIAS
from nscfg.core.errors import ErrorKind, expansion_error
from nscfg.core.model import (
    WILDCARD_ARM,
    And,
    Arm,
    ExpressionNode,
    FinalArm,
    Leaf,
    Modifier,
    Not,
    Or,
    RawArm,
    Scope,
)
from nscfg.core.parse.expression import ExpressionBuilder, references_doc
from nscfg.core.parse.modifiers import apply_release_policy, check_match_modifiers, split_modifier

logger = logging.getLogger(__name__)


def _prepare(raw_arms: list[RawArm]) -> list[Arm]:
    arms: list[Arm] = []
    for raw in raw_arms:
        modifier, condition = split_modifier(raw.condition)
        arms.append(
            Arm(
                index=raw.index,
                modifier=modifier,
                expression=None,
                content=raw.content,
                is_wildcard=condition == WILDCARD_ARM,
                condition=condition,
            )
        )
    return arms


def _build(arms: list[Arm], builder: ExpressionBuilder, settings: Settings) -> list[Arm]:
    out: list[Arm] = []
    for arm in arms:
        modifier = apply_release_policy(arm.modifier, settings)
        expression = None if arm.is_wildcard else builder.build(arm.condition)
        out.append(replace(arm, modifier=modifier, expression=expression))
    return out


def _check_wildcard_last(arms: list[Arm]) -> None:
    for arm in arms[:-1]:
        if arm.is_wildcard:
            raise expansion_error(ErrorKind.WILDCARD_ARM_NOT_LAST)


def _any_of(nodes: list[ExpressionNode]) -> ExpressionNode:
    node = nodes[0]
    for n in nodes[1:]:
        node = Or(node, n)
    return node


def assemble_target(
    raw_arms: list[RawArm],
    builder: ExpressionBuilder,
    settings: Settings,
    scope: Scope = "item",
) -> list[FinalArm]:
    """Item-level construct: every matching arm is included."""
    if scope == "function":
        raise expansion_error(ErrorKind.TARGET_IN_FUNCTION)

    arms = _prepare(raw_arms)
    _check_wildcard_last(arms)
    if arms and arms[-1].is_wildcard:
        raise expansion_error(ErrorKind.WILDCARD_ARM_ON_TARGET)

    out: list[FinalArm] = []
    for arm in _build(arms, builder, settings):
        assert arm.expression is not None
        tree = arm.expression

        if arm.modifier is Modifier.ACTIVATE:
            out.append(_final(arm, guard=None, enabled=True, doc_guard=None))
            continue
        if arm.modifier is Modifier.DEACTIVATE:
            out.append(_final(arm, guard=None, enabled=False, doc_guard=None))
            continue

        guard: ExpressionNode = tree
        if settings.autodoc and not references_doc(arm.condition):
            guard = Or(Leaf(DOC_ALIAS), tree)
        logger.debug("target arm %d wrapped=%s", arm.index, guard is not tree)
        out.append(_final(arm, guard=guard, enabled=True, doc_guard=tree))
    return out


def assemble_match(
    raw_arms: list[RawArm],
    builder: ExpressionBuilder,
    settings: Settings,
) -> list[FinalArm]:
    """Function-scoped construct: first matching arm wins, `_` must close the list.

    Each arm is guarded by the negation of every earlier live arm so that at
    most one block survives.
    """
    arms = _prepare(raw_arms)
    _check_wildcard_last(arms)
    if not arms or not arms[-1].is_wildcard:
        raise expansion_error(ErrorKind.WILDCARD_ARM_MISSING)
    check_match_modifiers(arms)

    arms = _build(arms, builder, settings)

    if any(a.modifier is Modifier.ACTIVATE for a in arms):
        return [
            _final(a, guard=None, enabled=a.modifier is Modifier.ACTIVATE, doc_guard=None)
            for a in arms
        ]

    out: list[FinalArm] = []
    earlier: list[ExpressionNode] = []
    for arm in arms:
        if arm.modifier is Modifier.DEACTIVATE:
            out.append(_final(arm, guard=None, enabled=False, doc_guard=None))
            continue

        guard: Optional[ExpressionNode]
        if arm.is_wildcard:
            guard = Not(_any_of(earlier)) if earlier else None
        else:
            assert arm.expression is not None
            guard = And(arm.expression, Not(_any_of(earlier))) if earlier else arm.expression
            earlier.append(arm.expression)
        out.append(_final(arm, guard=guard, enabled=True, doc_guard=None))
    return out


def _final(
    arm: Arm,
    *,
    guard: Optional[ExpressionNode],
    enabled: bool,
    doc_guard: Optional[ExpressionNode],
) -> FinalArm:
    return FinalArm(
        index=arm.index,
        guard=guard,
        enabled=enabled,
        doc_guard=doc_guard,
        content=arm.content,
        modifier=arm.modifier,
        is_wildcard=arm.is_wildcard,
    )
