from headergrade.models import Evaluation, Level, Note, Status
from headergrade.rules.base import Findings, Rule
from headergrade.tokenizer import normalize_token, split_directives

KNOWN_DIRECTIVES = frozenset(["cache", "cookies", "storage", "executioncontexts"])


class ClearSiteDataRule(Rule):
    header_name = "clear-site-data"
    display_name = "Clear-Site-Data"
    missing_message = "Clear-Site-Data header missing; user data may persist across sessions."

    def inspect(self, value, context):
        tokens = [t for t in (normalize_token(p) for p in split_directives(value, ",")) if t]
        if not tokens:
            return Evaluation(0, Status.FAIL, (
                Note(Level.DETAIL, self.observed(value)),
                Note(Level.FAIL, "Clear-Site-Data header present but no directives provided; "
                                 "browsers ignore empty lists."),
            ))

        findings = Findings()
        wildcard = "*" in tokens
        unknown = [t for t in tokens if t != "*" and t not in KNOWN_DIRECTIVES]

        if wildcard:
            findings.warn('Wildcard "*" clears all data; prefer targeted directives for minimal impact.')
        if unknown:
            findings.warn(f"Unknown directives detected: {', '.join(unknown)}.")
        if not wildcard:
            findings.info(f"Clearing scopes: {', '.join(tokens)}.")

        return self.verdict(findings, value, context, {Status.PASS: 1.0, Status.PARTIAL: 0.6})
