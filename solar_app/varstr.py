"""
Placeholder expansion for deployment parameters.

Grammar, scanned left to right in a single pass:

    placeholder := "$" IDENT | "${" IDENT "}"
    escape      := "$$"
    IDENT       := [A-Za-z_][A-Za-z0-9_]*

A "$" that does not start a placeholder or an escape is copied through
as-is, as is an unterminated or empty "${". Substituted values are never
re-scanned.
"""

from collections.abc import Callable, Iterator

SIGIL = "$"
OPEN = "{"
CLOSE = "}"


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ident_char(ch: str) -> bool:
    return _is_ident_start(ch) or ("0" <= ch <= "9")


def _scan_ident(s: str, start: int) -> int:
    """Return the end index of the identifier at start, or start if none."""
    if start >= len(s) or not _is_ident_start(s[start]):
        return start
    end = start + 1
    while end < len(s) and _is_ident_char(s[end]):
        end += 1
    return end


def _tokens(template: str) -> Iterator[tuple[bool, str]]:
    """Yield (is_placeholder, text) pairs covering the whole template."""
    literal_start = 0
    i = 0
    n = len(template)

    while i < n:
        if template[i] != SIGIL:
            i += 1
            continue

        nxt = i + 1

        if nxt < n and template[nxt] == SIGIL:
            yield False, template[literal_start:i + 1]
            i = nxt + 1
            literal_start = i
            continue

        if nxt < n and template[nxt] == OPEN:
            end = _scan_ident(template, nxt + 1)
            if end > nxt + 1 and end < n and template[end] == CLOSE:
                if i > literal_start:
                    yield False, template[literal_start:i]
                yield True, template[nxt + 1:end]
                i = end + 1
                literal_start = i
                continue
            i += 1
            continue

        end = _scan_ident(template, nxt)
        if end > nxt:
            if i > literal_start:
                yield False, template[literal_start:i]
            yield True, template[nxt:end]
            i = end
            literal_start = i
            continue

        i += 1

    if literal_start < n:
        yield False, template[literal_start:]


def expand(template: str, mapping: Callable[[str], str]) -> str:
    """
    Replace every placeholder in template with mapping(name).

    Exceptions raised by mapping propagate and abort the expansion.
    """
    parts = []
    for is_placeholder, text in _tokens(template):
        parts.append(mapping(text) if is_placeholder else text)
    return "".join(parts)


def placeholders(template: str) -> list[str]:
    """List placeholder names in order of appearance, duplicates included."""
    return [text for is_placeholder, text in _tokens(template) if is_placeholder]
