import re

from headergrade.models import Status
from headergrade.rules.base import Findings, Rule
from headergrade.tokenizer import split_directives

ONE_DAY = 86400
SIX_MONTHS = 15552000
ONE_YEAR = 31536000

_MAX_AGE = re.compile(r'max-age\s*=\s*("?)(\d+)\1$')
_UNPARSABLE = object()


def parse_max_age(directives):
    """Return max-age in seconds, None when absent, or _UNPARSABLE."""
    for directive in directives:
        if directive.startswith("max-age"):
            match = _MAX_AGE.match(directive)
            if not match:
                return _UNPARSABLE
            return int(match.group(2))
    return None


class StrictTransportSecurityRule(Rule):
    header_name = "strict-transport-security"
    display_name = "HSTS"
    missing_message = ("Strict-Transport-Security header missing; "
                       "HTTPS downgrade protection disabled.")

    def inspect(self, value, context):
        directives = [d.lower() for d in split_directives(value)]
        max_age = parse_max_age(directives)
        findings = Findings()

        if max_age is None:
            findings.fail("Missing max-age directive; browsers ignore the header without it.")
        elif max_age is _UNPARSABLE:
            findings.fail("Unable to parse max-age value; ensure it is an integer in seconds.")
        elif max_age <= 0:
            findings.fail("max-age is set to zero or negative; this disables HSTS.")
        elif max_age < ONE_DAY:
            findings.fail("max-age below 86400 seconds; HSTS expires too quickly to be effective.")
        elif max_age < SIX_MONTHS:
            findings.warn("max-age below 6 months; consider increasing to at least 6 months.")
        elif max_age < ONE_YEAR:
            findings.warn("max-age below 1 year; browsers may drop HSTS between visits.")

        if "includesubdomains" not in directives:
            findings.warn("includeSubDomains missing; sub-domains remain vulnerable to downgrade attacks.")

        if "preload" in directives:
            findings.info("preload flag present; ensure domain is registered in the HSTS preload list.")

        return self.verdict(
            findings, value, context,
            {Status.PASS: 1.0, Status.PARTIAL: 0.6, Status.FAIL: 0.0},
            success="Long-lived HSTS with includeSubDomains provides strong downgrade protection.",
        )
