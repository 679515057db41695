from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from nscfg.core.config.tables import DOC_ALIAS
from nscfg.core.errors import ErrorKind, expansion_error
from nscfg.core.model import And, ExpressionNode, LegacyLiteral, Leaf, Not, Or
from nscfg.core.parse.modifiers import MODIFIER_DEACTIVATE
from nscfg.core.parse.scan import matching_close
from nscfg.core.resolve.resolver import Resolver

logger = logging.getLogger(__name__)

LEGACY_MARKER = "#"
_LEGACY = re.compile(r"#\[\s*cfg\s*\((.*)\)\s*\]\Z", re.DOTALL)

OP_NOT = "!"
OP_AND = "&"
OP_OR = "|"
GROUP_OPEN = "("
GROUP_CLOSE = ")"

MAX_ALIAS_DEPTH = 16

_WORD_CHARS = re.compile(r"[A-Za-z0-9_:.\-]")


@dataclass(frozen=True)
class Token:
    kind: str  # "word" or an operator glyph
    text: str


def tokenize(condition: str) -> list[Token]:
    tokens: list[Token] = []
    word: list[str] = []

    def flush() -> None:
        if word:
            tokens.append(Token("word", "".join(word)))
            word.clear()

    for ch in condition:
        if _WORD_CHARS.match(ch):
            word.append(ch)
            continue
        flush()
        if ch.isspace():
            continue
        if ch in (OP_NOT, OP_AND, OP_OR, GROUP_OPEN, GROUP_CLOSE):
            tokens.append(Token(ch, ch))
            continue
        raise expansion_error(ErrorKind.INVALID_CHARACTER, ch)
    flush()
    return tokens


class _Parser:
    """Left-to-right parser: `&` and `|` share one precedence level."""

    def __init__(self, condition: str, tokens: list[Token], builder: "ExpressionBuilder", stack: tuple[str, ...]):
        self.condition = condition
        self.tokens = tokens
        self.pos = 0
        self.builder = builder
        self.stack = stack

    def peek(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def parse(self) -> ExpressionNode:
        node = self.expr()
        tok = self.peek()
        if tok is not None:
            # Only a stray `)` can stop expr() early at top level.
            raise expansion_error(ErrorKind.INVALID_CHARACTER, tok.text)
        return node

    def expr(self) -> ExpressionNode:
        node = self.unary()
        while True:
            tok = self.peek()
            if tok is None or tok.kind == GROUP_CLOSE:
                return node
            if tok.kind == OP_AND:
                self.take()
                node = And(node, self.unary())
            elif tok.kind == OP_OR:
                self.take()
                node = Or(node, self.unary())
            else:
                raise expansion_error(ErrorKind.MISSING_OPERATOR, self.condition)

    def unary(self) -> ExpressionNode:
        tok = self.peek()
        if tok is None:
            raise expansion_error(ErrorKind.EMPTY_NODE)
        if tok.kind == OP_NOT:
            self.take()
            return Not(self.unary())
        if tok.kind == GROUP_OPEN:
            self.take()
            inner = self.peek()
            if inner is None:
                raise expansion_error(ErrorKind.INVALID_CHARACTER, GROUP_OPEN)
            node = self.expr()
            if self.peek() is None:
                raise expansion_error(ErrorKind.INVALID_CHARACTER, GROUP_OPEN)
            self.take()
            return node
        if tok.kind == "word":
            self.take()
            return self.builder.term(tok.text, self.stack)
        # An operator or `)` where an operand belongs.
        raise expansion_error(ErrorKind.EMPTY_NODE)


class ExpressionBuilder:
    """Builds expression trees from arm conditions, expanding aliases recursively."""

    def __init__(self, resolver: Resolver, max_depth: int = MAX_ALIAS_DEPTH) -> None:
        self.resolver = resolver
        self.max_depth = max_depth

    def build(self, condition: str) -> ExpressionNode:
        text = condition.strip()
        if not text:
            raise expansion_error(ErrorKind.EMPTY_NODE)
        if LEGACY_MARKER in text:
            return self._legacy(text)
        return self._simplified(text, ())

    def term(self, word: str, stack: tuple[str, ...]) -> ExpressionNode:
        if word.startswith(MODIFIER_DEACTIVATE):
            raise expansion_error(ErrorKind.MODIFIER_NOT_FIRST, word)
        if ":" in word:
            label = word.partition(":")[0]
            if not label:
                raise expansion_error(ErrorKind.EMPTY_NODE)
            return Leaf(self.resolver.resolve_predicate(word))

        if word in stack or len(stack) >= self.max_depth:
            raise expansion_error(ErrorKind.ALIAS_RECURSION, word)
        expansion = self.resolver.resolve_alias(word)
        logger.debug("expanding alias %s -> %s", word, expansion)
        return self._simplified(expansion, stack + (word,))

    def _simplified(self, text: str, stack: tuple[str, ...]) -> ExpressionNode:
        tokens = tokenize(text)
        if not tokens:
            raise expansion_error(ErrorKind.EMPTY_NODE)
        return _Parser(text, tokens, self, stack).parse()

    def _legacy(self, text: str) -> LegacyLiteral:
        if not text.startswith(LEGACY_MARKER):
            raise expansion_error(ErrorKind.MIXED_SYNTAX_ERROR, text)

        open_index = text.find("[")
        if open_index != 1:
            raise expansion_error(ErrorKind.LEGACY_SYNTAX_ERROR, text)
        close = matching_close(text, open_index)
        if close is None:
            raise expansion_error(ErrorKind.LEGACY_SYNTAX_ERROR, text)
        if text[close + 1 :].strip():
            raise expansion_error(ErrorKind.MIXED_SYNTAX_ERROR, text)

        m = _LEGACY.match(text)
        if m is None or not m.group(1).strip():
            raise expansion_error(ErrorKind.LEGACY_SYNTAX_ERROR, text)
        return LegacyLiteral(m.group(1).strip())


_DOC_REFERENCE = re.compile(r"(?<![A-Za-z0-9_.\-])" + re.escape(DOC_ALIAS) + r"(?![A-Za-z0-9_.\-])")


def references_doc(condition: str) -> bool:
    """Literal check for the documentation label in an arm condition.

    Aliases that expand to `doc` are not detected.
    """
    return _DOC_REFERENCE.search(condition) is not None
