"""Tag Name Parsing: free-text tag field -> ordered list of distinct candidate names.

Invariants:
    - Pure function: no IO
    - Candidates are trimmed; empty candidates silently dropped
    - Matching is case-sensitive and exact ("Python" and "python" are two tags)
    - Output has no duplicates; first occurrence wins the position
"""

from collections.abc import Iterable

_SEPARATOR = ","


def parse_tag_names(raw: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated tag field into distinct trimmed names.

    Also accepts an iterable of already-split fields; each element is split
    on commas again so ["a, b", "c"] and "a, b, c" give the same result.
    """
    if raw is None:
        return []
    fields = [raw] if isinstance(raw, str) else list(raw)

    names: list[str] = []
    seen: set[str] = set()
    for chunk in fields:
        for candidate in chunk.split(_SEPARATOR):
            name = candidate.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            names.append(name)
    return names
