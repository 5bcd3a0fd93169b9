from headergrade.models import Evaluation, Level, Note, Status
from headergrade.tokenizer import split_directives
from headergrade.rules.base import Rule

STRICT_POLICIES = frozenset([
    "no-referrer",
    "strict-origin-when-cross-origin",
    "same-origin",
    "strict-origin",
])
MODERATE_POLICIES = frozenset([
    "origin-when-cross-origin",
    "origin",
    "no-referrer-when-downgrade",
])


def classify_policy(policy):
    """Return 'strict', 'moderate', 'unsafe' or 'unknown'."""
    if policy in STRICT_POLICIES:
        return "strict"
    if policy in MODERATE_POLICIES:
        return "moderate"
    if policy == "unsafe-url":
        return "unsafe"
    return "unknown"


class ReferrerPolicyRule(Rule):
    header_name = "referrer-policy"
    display_name = "Referrer-Policy"
    missing_message = ("Referrer-Policy header missing; browsers default to "
                       "strict-origin-when-cross-origin or the legacy no-referrer-when-downgrade.")

    def inspect(self, value, context):
        policies = [p.lower() for p in split_directives(value, ",")]
        if not policies:
            return Evaluation(0, Status.FAIL, (
                Note(Level.DETAIL, self.observed(value)),
                Note(Level.FAIL, "Referrer-Policy header present but no valid token detected."),
            ))

        effective = policies[0]
        notes = [Note(Level.DETAIL, f"Effective policy: {effective}")]

        classification = classify_policy(effective)
        if classification == "strict":
            status, multiplier = Status.PASS, 1.0
            notes.append(Note(Level.SUCCESS, "Policy meets modern privacy expectations."))
        elif classification == "moderate":
            status, multiplier = Status.PARTIAL, 0.6
            notes.append(Note(Level.WARNING,
                              "Policy is better than default but still reveals extra origin data."))
        elif classification == "unsafe":
            status, multiplier = Status.FAIL, 0.0
            notes.append(Note(Level.FAIL,
                              "unsafe-url leaks the full referrer including query strings."))
        else:
            status, multiplier = Status.PARTIAL, 0.4
            notes.append(Note(Level.WARNING,
                              "Unrecognized policy; treat as partial credit pending manual review."))

        if len(policies) > 1:
            notes.append(Note(Level.INFO, "Multiple policies detected; browsers use the first token."))

        return Evaluation(context.weight * multiplier, status, tuple(notes))
