from headergrade.models import Evaluation, Level, Note, Status
from headergrade.rules.base import Findings, Rule
from headergrade.tokenizer import parse_feature_policy

CRITICAL_FEATURES = (
    "camera",
    "microphone",
    "geolocation",
    "usb",
    "serial",
    "payment",
    "interest-cohort",
    "bluetooth",
)


def grade_feature(tokens):
    """Classify one feature allowlist (None when the feature is not listed)."""
    if tokens is None:
        return "absent"
    if "*" in tokens:
        return "wildcard"
    if not tokens or tokens == ["none"]:
        return "deny"
    return "scoped"


class PermissionsPolicyRule(Rule):
    """Checks that powerful browser features are denied.

    The worst outcome across the critical features decides the verdict:
    a wildcard fails the header, anything short of an explicit ``()`` warns.
    """

    header_name = "permissions-policy"
    display_name = "Permissions-Policy"
    missing_message = ("Permissions-Policy header missing; powerful browser features "
                       "such as camera and geolocation stay available to embedded content.")

    def inspect(self, value, context):
        features = parse_feature_policy(value)
        if not features:
            return Evaluation(0, Status.FAIL, (
                Note(Level.DETAIL, self.observed(value)),
                Note(Level.FAIL, "No parsable feature directives; expected feature=(allowlist) entries."),
            ))

        findings = Findings()
        denied = []
        for feature in CRITICAL_FEATURES:
            grade = grade_feature(features.get(feature))
            if grade == "wildcard":
                findings.fail(f"{feature} is allowed for every origin (*).")
            elif grade == "absent":
                findings.warn(f"{feature} not restricted; defaults let same-origin frames use it.")
            elif grade == "scoped":
                allowed = " ".join(features[feature])
                findings.warn(f"{feature} is still allowed for {allowed}; use {feature}=() if unused.")
            else:
                denied.append(feature)

        if denied:
            findings.info(f"Denied features: {', '.join(denied)}.")

        return self.verdict(
            findings, value, context,
            {Status.PASS: 1.0, Status.PARTIAL: 0.6, Status.FAIL: 0.0},
            success="All critical browser features are explicitly disabled.",
        )
