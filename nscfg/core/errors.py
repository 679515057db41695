from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from nscfg.core.config.tables import (
    ENV_KEY_ALIAS,
    ENV_KEY_PREDICATE,
    MODIFIER_BEHAVIOUR_KEY,
)


class ErrorKind(str, Enum):
    MISSING_OPERATOR = "MissingOperator"
    EMPTY_NODE = "EmptyNode"
    INVALID_CHARACTER = "InvalidCharacter"
    ALIAS_NOT_FOUND = "AliasNotFound"
    INVALID_CONFIGURATION_PREDICATE = "InvalidConfigurationPredicate"
    ALIAS_RECURSION = "AliasRecursion"
    EMPTY_ARM = "EmptyArm"
    WILDCARD_ARM_NOT_LAST = "WildcardArmNotLast"
    ARM_SEPARATOR_MISSING = "ArmSeparatorMissing"
    CONTENT_SEPARATOR_ERROR = "ContentSeparatorError"
    CONTENT_SEPARATOR_MISSING = "ContentSeparatorMissing"
    WILDCARD_ARM_MISSING = "WildcardArmMissing"
    WILDCARD_ARM_ON_TARGET = "WildcardArmOnTarget"
    TARGET_IN_FUNCTION = "TargetInFunction"
    LEGACY_SYNTAX_ERROR = "LegacySyntaxError"
    MIXED_SYNTAX_ERROR = "MixedSyntaxError"
    MODIFIER_NOT_FIRST = "ModifierNotFirst"
    MODIFIER_PANIC_RELEASE = "ModifierPanicRelease"
    MATCH_MODIFIER_MORE_THAN_ONE_ACTIVATE = "MatchModifierMoreThanOneActivate"
    MATCH_DEACTIVATED_WILD_ARM = "MatchDeactivatedWildArm"


@dataclass(frozen=True)
class NscfgError(Exception):
    """Base error envelope. Core code raises these; the CLI prints them."""

    code: str
    message: str
    token: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        loc = self.path if self.path else "<cfg>"
        return f"{loc}: {self.code}: {self.message}"


class ExpansionError(NscfgError):
    @property
    def kind(self) -> ErrorKind:
        return ErrorKind(self.code)


class ConfigLoadError(NscfgError):
    pass


def _message(kind: ErrorKind, token: Optional[str]) -> str:
    t = token if token is not None else ""
    if kind is ErrorKind.MISSING_OPERATOR:
        return f"operator `&` or `|` missing for `{t}`; a term must not contain spaces"
    if kind is ErrorKind.EMPTY_NODE:
        return "empty node generated from condition; is a term missing between operators?"
    if kind is ErrorKind.INVALID_CHARACTER:
        return f"invalid character `{t}`"
    if kind is ErrorKind.ALIAS_NOT_FOUND:
        return f"alias `{t}` has no match; define it in config as `{ENV_KEY_ALIAS}{t}`"
    if kind is ErrorKind.INVALID_CONFIGURATION_PREDICATE:
        return (
            f"configuration predicate `{t}` has no match; "
            f"define it in config as `{ENV_KEY_PREDICATE}{t}`"
        )
    if kind is ErrorKind.ALIAS_RECURSION:
        return f"alias `{t}` expands into itself; check `{ENV_KEY_ALIAS}{t}` in config"
    if kind is ErrorKind.EMPTY_ARM:
        return "empty arm with no condition detected"
    if kind is ErrorKind.WILDCARD_ARM_NOT_LAST:
        return "wildcard arm `_` must always be the last arm"
    if kind is ErrorKind.ARM_SEPARATOR_MISSING:
        return "arm syntax incorrect; is a separator `,` missing between arms?"
    if kind is ErrorKind.CONTENT_SEPARATOR_ERROR:
        return f"arm syntax incorrect; is the content separator `=>` well formed in `{t}`?"
    if kind is ErrorKind.CONTENT_SEPARATOR_MISSING:
        return f"arm content separator `=>` missing in `{t}`"
    if kind is ErrorKind.WILDCARD_ARM_MISSING:
        return "match construct must handle all cases with a `_` wildcard arm"
    if kind is ErrorKind.WILDCARD_ARM_ON_TARGET:
        return "target construct cannot have a `_` wildcard arm"
    if kind is ErrorKind.TARGET_IN_FUNCTION:
        return "target construct cannot be used inside a function; use match instead"
    if kind is ErrorKind.LEGACY_SYNTAX_ERROR:
        return f"legacy syntax error in `{t}`"
    if kind is ErrorKind.MIXED_SYNTAX_ERROR:
        return "legacy syntax and simplified syntax can't be mixed on the same arm"
    if kind is ErrorKind.MODIFIER_NOT_FIRST:
        return "arm modifiers `+`, `-` and `@` must be the first character of the arm"
    if kind is ErrorKind.MODIFIER_PANIC_RELEASE:
        return (
            "arm modifiers are rejected in release builds; "
            f"set `{MODIFIER_BEHAVIOUR_KEY}` to `ignore` to drop them instead"
        )
    if kind is ErrorKind.MATCH_MODIFIER_MORE_THAN_ONE_ACTIVATE:
        return "match construct cannot have more than one `+` modifier"
    if kind is ErrorKind.MATCH_DEACTIVATED_WILD_ARM:
        return "match construct cannot deactivate the wildcard arm with `-`"
    raise AssertionError(f"unhandled error kind: {kind}")  # pragma: no cover


def expansion_error(
    kind: ErrorKind, token: Optional[str] = None, path: Optional[str] = None
) -> ExpansionError:
    return ExpansionError(code=kind.value, message=_message(kind, token), token=token, path=path)
