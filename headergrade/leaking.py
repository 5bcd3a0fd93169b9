"""Information-disclosure headers.

These never go through a rule: presence alone costs the configured weight.
The notes only describe what is being disclosed.
"""

import re

from headergrade.models import HeaderEntry, Level, Note

_VERSION_PATTERN = re.compile(r"\d+(?:\.\d+)+|/\s*\d+")


def describe_disclosure(name, value):
    if _VERSION_PATTERN.search(value):
        return Note(Level.WARNING,
                    f"{name} reveals detailed version information, which helps attackers "
                    "match known vulnerabilities.")
    return Note(Level.INFO,
                f"{name} reveals implementation details; remove or genericize it.")


def classify_leaking(headers, entries):
    """Return (leaking entries, total penalty) for the catalog entries present in headers.

    ``headers`` must already have lower-case names.
    """
    leaking = []
    penalty = 0
    for entry in entries:
        value = headers.get(entry.name)
        # An empty value discloses nothing
        if value is None or not value.strip():
            continue
        penalty += entry.weight
        leaking.append(HeaderEntry(
            name=entry.name,
            value=value,
            present=True,
            weight=entry.weight,
            leaking=True,
            notes=(describe_disclosure(entry.name, value),),
            score_delta=entry.weight,
        ))
    return leaking, penalty
