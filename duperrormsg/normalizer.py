"""Turn a raw string-literal token into the key used to compare messages."""

from __future__ import annotations

import re

# A percent sign, optional flag/width/precision characters, then one verb letter.
_FORMAT_SPECIFIER_RE = re.compile(r"%[0-9.\-+#]*[A-Za-z]")

PLACEHOLDER = "%x"

_DELIMITERS = ('"', "`")


def strip_delimiters(raw: str) -> str:
    """Remove one pair of matching outer quotes ("..." or `...`)."""
    if len(raw) >= 2 and raw[0] in _DELIMITERS and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def normalize(raw: str) -> str:
    """
    Return the comparison key for a literal token.

    "user %s not found", "user %v not found" and "user %-5d not found" all
    map to 'user %x not found'. A lone '%' (e.g. "100%") is left as is, and so
    is the first '%' of an escaped "%%".
    An empty result means there is no usable message.
    """
    content = strip_delimiters(raw)
    return _FORMAT_SPECIFIER_RE.sub(PLACEHOLDER, content)
