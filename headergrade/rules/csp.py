"""Content-Security-Policy scoring.

Each of the key directives contributes a sub-score in [0, 1] with its own
relative weight; the header earns ``weight * earned / total``.  Findings are
collected alongside and decide the status independently of the sub-scores.
"""

from headergrade.models import Evaluation, Level, Note, Status
from headergrade.rules.base import Findings, Rule
from headergrade.tokenizer import extract_directive_map

HASH_PREFIXES = ("nonce-", "sha256-", "sha384-", "sha512-")


def _clamp(value, low=0.0, high=1.0):
    return min(max(value, low), high)


class ScoreTracker:
    """Accumulates weighted sub-scores."""

    def __init__(self):
        self.earned = 0.0
        self.maximum = 0.0

    def add(self, score, weight):
        self.earned += _clamp(score) * weight
        self.maximum += weight

    def ratio(self):
        if self.maximum == 0:
            return 0.0
        return self.earned / self.maximum


def has_nonce_or_hash(tokens):
    return any(t.startswith(HASH_PREFIXES) for t in tokens)


def has_data_or_blob(tokens):
    return "data:" in tokens or "blob:" in tokens


class ContentSecurityPolicyRule(Rule):
    header_name = "content-security-policy"
    display_name = "Content-Security-Policy"
    missing_message = "CSP header missing; browsers fall back to permissive defaults."

    def evaluate(self, value, context):
        if value is None and context.headers.get("content-security-policy-report-only"):
            return Evaluation(0, Status.MISSING, (
                Note(Level.WARNING,
                     "CSP is only deployed in report-only mode; violations are reported but not blocked."),
            ))
        return super().evaluate(value, context)

    def inspect(self, value, context):
        directives = extract_directive_map(value)
        findings = Findings()
        tracker = ScoreTracker()

        default_src = directives.get("default-src")
        script_src = directives.get("script-src", default_src)

        self._check_default_src(default_src, findings, tracker)
        self._check_script_src(script_src, findings, tracker)
        self._check_object_src(directives.get("object-src"), findings, tracker)
        self._check_base_uri(directives.get("base-uri"), findings, tracker)
        self._check_frame_ancestors(directives.get("frame-ancestors"), findings, tracker)

        if "upgrade-insecure-requests" in directives:
            tracker.add(1, 0.5)
        elif "block-all-mixed-content" in directives:
            tracker.add(0.7, 0.5)
        else:
            findings.info("Consider upgrade-insecure-requests or block-all-mixed-content "
                          "to prevent mixed content downgrades.")
            tracker.add(0, 0.5)

        if "report-uri" in directives or "report-to" in directives:
            findings.info("CSP reporting detected; ensure the reporting endpoint is monitored.")
            tracker.add(1, 0.3)
        else:
            tracker.add(0, 0.3)

        return Evaluation(
            context.weight * tracker.ratio(),
            findings.status,
            findings.notes(self.observed(value),
                           "CSP directives enforce strict defaults without obvious bypasses."),
        )

    def _check_default_src(self, tokens, findings, tracker):
        if not tokens:
            findings.fail("Missing default-src directive; fallback allows all origins.")
            tracker.add(0, 2)
            return

        score = 0.25
        wildcard = "*" in tokens
        broad_https = "https:" in tokens

        if wildcard:
            findings.fail("default-src allows wildcards or schemes (e.g., * or http:).")
            score -= 0.15
        else:
            score += 0.2

        if "http:" in tokens:
            findings.fail("default-src permits http: resources, enabling downgrade attacks.")
            score -= 0.25
        else:
            score += 0.2

        if broad_https:
            findings.warn("default-src allows any https: origin; consider narrowing to explicit hosts.")

        if has_data_or_blob(tokens):
            findings.warn("default-src allows data: or blob:, which weakens isolation.")
            score -= 0.05
        else:
            score += 0.1

        if len(tokens) == 1 and tokens[0] in ("self", "none"):
            score += 0.25
        elif "self" in tokens and not wildcard and not broad_https:
            score += 0.15

        tracker.add(score, 2)

    def _check_script_src(self, tokens, findings, tracker):
        if tokens is None:
            findings.warn("script-src not defined; scripts inherit default-src which may be too broad.")
            tracker.add(0.25, 3)
            return

        score = 0.2
        strict_dynamic = "strict-dynamic" in tokens
        mitigated = strict_dynamic or has_nonce_or_hash(tokens)
        wildcard = "*" in tokens
        insecure = "http:" in tokens

        if "unsafe-inline" in tokens and not mitigated:
            findings.fail("script-src allows unsafe-inline without nonce/hash/strict-dynamic.")
            score -= 0.25
        elif "unsafe-inline" in tokens:
            findings.warn("script-src relies on unsafe-inline but mitigated by nonces/hashes.")
            score += 0.05
        else:
            score += 0.2

        if "unsafe-eval" in tokens:
            findings.warn("script-src allows unsafe-eval; prefer removing legacy eval usage.")
        else:
            score += 0.1

        if wildcard:
            findings.fail("script-src allows wildcards or unrestricted schemes.")
            score -= 0.2
        else:
            score += 0.15

        if insecure:
            findings.fail("script-src permits http: scripts, exposing downgrade/XSS risks.")
            score -= 0.2
        else:
            score += 0.1

        if "https:" in tokens:
            findings.warn("script-src allows any https: host; explicitly pin trusted origins.")

        if has_data_or_blob(tokens):
            findings.warn("script-src allows data: or blob:, increasing XSS exposure.")
        else:
            score += 0.05

        if not wildcard and not insecure:
            score += 0.1
        if mitigated:
            score += 0.2
        if strict_dynamic:
            score += 0.05

        tracker.add(score, 3)

    def _check_object_src(self, tokens, findings, tracker):
        if not tokens:
            findings.warn("object-src not set; recommend setting to none.")
            tracker.add(0.25, 0.8)
        elif tokens != ["none"]:
            findings.warn("object-src should be explicitly set to none to block plug-in content.")
            tracker.add(0.5, 0.8)
        else:
            tracker.add(1, 0.8)

    def _check_base_uri(self, tokens, findings, tracker):
        if tokens is None:
            findings.warn("base-uri not declared; attackers could inject <base> tags.")
            tracker.add(0, 0.8)
        elif tokens not in (["self"], ["none"]):
            findings.warn("base-uri should be restricted to self or none.")
            tracker.add(0.4, 0.8)
        else:
            tracker.add(1, 0.8)

    def _check_frame_ancestors(self, tokens, findings, tracker):
        if tokens is None:
            findings.warn("frame-ancestors missing; clickjacking protections rely on this directive.")
            tracker.add(0.3, 1)
        elif "*" in tokens or "http:" in tokens:
            findings.fail("frame-ancestors allows broad embedding (e.g., * or http:).")
            tracker.add(0.1, 1)
        elif "none" in tokens:
            tracker.add(1, 1)
        else:
            tracker.add(0.8, 1)
