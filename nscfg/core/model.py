from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union


Scope = Literal["item", "function"]
ReleaseBehaviour = Literal["panic", "ignore"]

WILDCARD_ARM = "_"


class Modifier(str, Enum):
    NONE = "none"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    PANIC_ON_RELEASE = "panic_on_release"


@dataclass(frozen=True)
class Leaf:
    predicate: str


@dataclass(frozen=True)
class Not:
    child: "ExpressionNode"


@dataclass(frozen=True)
class And:
    left: "ExpressionNode"
    right: "ExpressionNode"


@dataclass(frozen=True)
class Or:
    left: "ExpressionNode"
    right: "ExpressionNode"


@dataclass(frozen=True)
class LegacyLiteral:
    raw: str


ExpressionNode = Union[Leaf, Not, And, Or, LegacyLiteral]


@dataclass(frozen=True)
class RawArm:
    """One `condition => content` pair as written, before any parsing."""

    index: int
    condition: str
    content: str
    braced: bool


@dataclass(frozen=True)
class Arm:
    index: int
    modifier: Modifier
    expression: Optional[ExpressionNode]  # None for the wildcard arm
    content: str
    is_wildcard: bool
    condition: str


@dataclass(frozen=True)
class FinalArm:
    index: int
    guard: Optional[ExpressionNode]  # None means the arm is forced on
    enabled: bool
    doc_guard: Optional[ExpressionNode]
    content: str
    modifier: Modifier
    is_wildcard: bool
