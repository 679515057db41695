from __future__ import annotations

from nscfg.core.errors import ErrorKind, expansion_error
from nscfg.core.model import RawArm
from nscfg.core.parse.scan import matching_close, top_level

ARM_SEPARATOR = ","
CONTENT_SEPARATOR = "=>"


def _segments(text: str) -> list[str]:
    cuts = [i for i, ch in top_level(text) if ch == ARM_SEPARATOR]
    out: list[str] = []
    start = 0
    for c in cuts:
        out.append(text[start:c])
        start = c + 1
    out.append(text[start:])
    return out


def _content_separators(segment: str) -> list[int]:
    return [
        i
        for i, ch in top_level(segment)
        if ch == "=" and segment[i + 1 : i + 2] == ">"
    ]


def _normalize_content(content: str) -> str:
    return content.strip()


def _split_arm(index: int, segment: str) -> RawArm:
    seps = _content_separators(segment)
    if not seps:
        if any(ch in "=>" for _, ch in top_level(segment)):
            raise expansion_error(ErrorKind.CONTENT_SEPARATOR_ERROR, segment.strip())
        raise expansion_error(ErrorKind.CONTENT_SEPARATOR_MISSING, segment.strip())

    pos = seps[0]
    condition = segment[:pos].strip()
    if not condition:
        raise expansion_error(ErrorKind.EMPTY_ARM)

    content = segment[pos + len(CONTENT_SEPARATOR) :].strip()
    if not content:
        raise expansion_error(ErrorKind.CONTENT_SEPARATOR_ERROR, segment.strip())

    if content.startswith("{"):
        close = matching_close(content, 0)
        if close is None:
            raise expansion_error(ErrorKind.CONTENT_SEPARATOR_ERROR, segment.strip())
        if content[close + 1 :].strip():
            raise expansion_error(ErrorKind.ARM_SEPARATOR_MISSING, segment.strip())
        return RawArm(
            index=index,
            condition=condition,
            content=_normalize_content(content[1:close]),
            braced=True,
        )

    if len(seps) > 1:
        raise expansion_error(ErrorKind.CONTENT_SEPARATOR_ERROR, segment.strip())

    return RawArm(index=index, condition=condition, content=content, braced=False)


def split_arms(text: str) -> list[RawArm]:
    """Split an arm list into `condition => content` pairs, in input order.

    A trailing separator is optional.
    """
    segments = _segments(text)
    if segments and not segments[-1].strip():
        segments.pop()

    arms: list[RawArm] = []
    for segment in segments:
        if not segment.strip():
            raise expansion_error(ErrorKind.EMPTY_ARM)
        arms.append(_split_arm(len(arms), segment))
    return arms
