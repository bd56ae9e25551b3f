"""
Small, focused text cleaning utilities.
"""

import re

_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\u00ad]")
_NON_BREAKING_SPACES = re.compile("[\u00a0\u202f]")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def normalize_whitespace(value: str) -> str:
    """Collapse unusual whitespace into single ASCII spaces.

    Example:
        >>> normalize_whitespace("a\\u00a0b\\u200bb")
        'a bb'
    """

    clean = _NON_BREAKING_SPACES.sub(" ", value)
    clean = _ZERO_WIDTH.sub("", clean)
    clean = re.sub(r"[ \t\r\f\v]+", " ", clean)
    return clean.strip()


def slugify(value: str) -> str:
    """Return a lowercase anchor slug with hyphens between alphanumeric runs.

    Example:
        >>> slugify("  Getting Started: Setup & Install! ")
        'getting-started-setup-install'
    """

    return _NON_SLUG.sub("-", value.lower()).strip("-")
