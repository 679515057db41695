from __future__ import annotations

from nscfg.core.parse.scan import top_level


def split_items(content: str) -> list[str]:
    """Partition a block body into its top-level items.

    An item ends at a depth-0 `;` or at a `}` that closes back to depth 0 (a
    `;` right after that brace belongs to the same item). Comments and
    attributes preceding an item stay with it. Item text is never altered.
    """
    items: list[str] = []
    start = 0
    skip_until = -1
    events = list(top_level(content))

    for n, (i, ch) in enumerate(events):
        if i < skip_until:
            continue
        end: int | None = None
        if ch == ";":
            end = i + 1
        elif ch == "}":
            end = i + 1
            if n + 1 < len(events):
                j, nxt = events[n + 1]
                if nxt == ";" and not content[i + 1 : j].strip():
                    end = j + 1
                    skip_until = end
        if end is None:
            continue
        text = content[start:end].strip()
        if text:
            items.append(text)
        start = end

    rest = content[start:]
    if rest.strip():
        has_code = any(not ch.isspace() for _, ch in top_level(rest))
        if has_code or not items:
            items.append(rest.strip())
        else:
            items[-1] = items[-1] + rest.rstrip()
    return items
