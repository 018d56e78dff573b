"""Title page extraction for Fountain documents."""

from __future__ import annotations

import re

from fountainkit.parser.elements import TitlePage, TitlePageEntry

# Key: value on one line
INLINE_PATTERN = re.compile(r"^([^\t\s][^:]+):\s*([^\t\s].*)$")
# Key: with the values on following (indented) lines
DIRECTIVE_PATTERN = re.compile(r"^([^\t\s][^:]+):[\t\s]*$")

_KEY_ALIASES = {"author": "authors"}


def _normalize_key(key: str) -> str:
    key = key.strip().lower()
    return _KEY_ALIASES.get(key, key)


def split_title_page(contents: str) -> tuple[TitlePage, str]:
    """Split normalized document text into its title page and body.

    The title page is the first blank-line-delimited block when it holds
    ``Key: value`` pairs. A block made only of bare ``KEY:`` lines with no
    values (a lone ``FADE IN:`` for instance) is body text, not a title page.
    Any other line inside the block continues the latest key, indented or not.

    Args:
        contents: Document text with ``\\n`` line endings and no leading
            whitespace

    Returns:
        Tuple of (title page, body text). The body is ``contents`` unchanged
        when there is no title page.
    """
    top, sep, rest = contents.partition("\n\n")
    if not sep:
        return TitlePage(), contents

    entries: list[tuple[str, list[str]]] = []
    found = False
    has_values = False

    for line in top.split("\n"):
        directive = DIRECTIVE_PATTERN.match(line)
        if directive:
            found = True
            entries.append((_normalize_key(directive.group(1)), []))
            continue

        inline = INLINE_PATTERN.match(line)
        if inline:
            found = True
            has_values = True
            entries.append(
                (_normalize_key(inline.group(1)), [inline.group(2).strip()])
            )
            continue

        if found:
            # Continuation of the latest key, indented or not
            has_values = True
            entries[-1][1].append(line.strip())
        else:
            # Body text before any key: not a title page
            return TitlePage(), contents

    if not found or not has_values:
        return TitlePage(), contents

    title_page = TitlePage(
        entries=tuple(
            TitlePageEntry(key=key, values=tuple(values)) for key, values in entries
        )
    )
    return title_page, sep + rest
