from __future__ import annotations

from dataclasses import dataclass

from nscfg.core.model import And, ExpressionNode, FinalArm, LegacyLiteral, Leaf, Not, Or


@dataclass(frozen=True)
class Dialect:
    """How a target build system spells conditional predicates."""

    name: str
    all_fmt: str
    any_fmt: str
    not_fmt: str
    always_true: str
    always_false: str
    cfg_header: str
    doc_header: str

    def render(self, node: ExpressionNode) -> str:
        if isinstance(node, Leaf):
            return node.predicate
        if isinstance(node, LegacyLiteral):
            return node.raw
        if isinstance(node, Not):
            return self.not_fmt.format(self.render(node.child))
        if isinstance(node, And):
            return self.all_fmt.format(", ".join(self.render(n) for n in _chain(node, And)))
        if isinstance(node, Or):
            return self.any_fmt.format(", ".join(self.render(n) for n in _chain(node, Or)))
        raise TypeError(f"unknown expression node: {node!r}")

    def guard(self, arm: FinalArm) -> str:
        if not arm.enabled:
            return self.always_false
        if arm.guard is None:
            return self.always_true
        return self.render(arm.guard)

    def header(self, arm: FinalArm) -> str:
        return self.cfg_header.format(self.guard(arm))

    def doc_attr(self, arm: FinalArm) -> str:
        # Forced arms carry no doc guard; their header repeats the forced value.
        if arm.doc_guard is None:
            return self.doc_header.format(self.guard(arm))
        return self.doc_header.format(self.render(arm.doc_guard))


def _chain(node: And | Or, kind: type) -> list[ExpressionNode]:
    # Flatten the left spine only: `a | b | c` parses as ((a | b) | c).
    operands: list[ExpressionNode] = []
    current: ExpressionNode = node
    while isinstance(current, kind):
        operands.append(current.right)  # type: ignore[union-attr]
        current = current.left  # type: ignore[union-attr]
    operands.append(current)
    operands.reverse()
    return operands


RUST_DIALECT = Dialect(
    name="rust",
    all_fmt="all({})",
    any_fmt="any({})",
    not_fmt="not({})",
    always_true="all()",
    always_false="any()",
    cfg_header="#[cfg({})]",
    doc_header="#[cfg_attr(docsrs, doc(cfg({})))]",
)
