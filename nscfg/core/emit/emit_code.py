from __future__ import annotations

from nscfg.core.emit.dialect import RUST_DIALECT, Dialect
from nscfg.core.emit.items import split_items
from nscfg.core.model import FinalArm
from nscfg.core.parse.scan import scan

INDENT = "    "


def _indent_code(text: str, prefix: str) -> str:
    # Only line breaks seen by the scanner start a new code line; breaks inside
    # string literals and block comments are left untouched.
    breaks = [i for i, ch, _ in scan(text) if ch == "\n"]
    lines: list[str] = []
    start = 0
    for i in breaks:
        lines.append(text[start:i])
        start = i + 1
    lines.append(text[start:])
    return "\n".join(prefix + line if line.strip() else line for line in lines)


def emit_target(arms: list[FinalArm], *, docsrs: bool = False, dialect: Dialect = RUST_DIALECT) -> str:
    """Item-level output: the arm headers are repeated for every contained item."""
    lines: list[str] = []
    for arm in arms:
        header = dialect.header(arm)
        doc_attr = dialect.doc_attr(arm) if docsrs else None
        for item in split_items(arm.content):
            lines.append(header)
            if doc_attr is not None:
                lines.append(doc_attr)
            lines.append(item)
    return "\n".join(lines) + ("\n" if lines else "")


def emit_match(arms: list[FinalArm], *, dialect: Dialect = RUST_DIALECT) -> str:
    """Function-scoped output: guarded blocks inside one enclosing block, in arm order."""
    lines: list[str] = ["{"]
    for arm in arms:
        lines.append(INDENT + dialect.header(arm))
        lines.append(INDENT + "{")
        if arm.content:
            lines.append(_indent_code(arm.content, INDENT * 2))
        lines.append(INDENT + "}")
    lines.append("}")
    return "\n".join(lines) + "\n"
