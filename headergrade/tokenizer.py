"""Helpers that turn structured header values into directives and tokens.

Nothing in here raises on malformed input: empty directives are dropped and
unbalanced quotes are simply left on the token.
"""

import re

# feature=(tok tok ...) or feature=* / feature=self
_FEATURE_PATTERN = re.compile(
    r"([A-Za-z0-9_-]+)\s*=\s*(?:\(([^)]*)\)|([^,\s()]+))"
)
_QUOTES = re.compile(r"^['\"]|['\"]$")


def normalize_token(token):
    """Strip one surrounding quote (single or double) and lower-case."""
    return _QUOTES.sub("", token.strip()).lower()


def split_directives(value, separator=";"):
    """Split a header value on separator, trimming and dropping empties."""
    if not value:
        return []
    return [part.strip() for part in value.split(separator) if part.strip()]


def extract_directive_map(value):
    """Map each directive name to its normalized tokens.

    The first occurrence of a directive wins; later repeats are ignored.
    """
    directives = {}
    for directive in split_directives(value):
        name, *rest = directive.split()
        name = name.lower()
        if name in directives:
            continue
        directives[name] = [t for t in (normalize_token(r) for r in rest) if t]
    return directives


def parse_feature_policy(value):
    """Map each Permissions-Policy feature to its allowlist tokens.

    ``camera=()`` gives an empty list, ``camera=*`` gives ``['*']``.
    """
    features = {}
    if not value:
        return features
    for match in _FEATURE_PATTERN.finditer(value):
        name = match.group(1).lower()
        if name in features:
            continue
        if match.group(2) is not None:
            raw_tokens = match.group(2).split()
        else:
            raw_tokens = [match.group(3)]
        features[name] = [t for t in (normalize_token(r) for r in raw_tokens) if t]
    return features
