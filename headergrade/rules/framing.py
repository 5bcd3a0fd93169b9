from headergrade.models import Evaluation, Level, Note, Status
from headergrade.rules.base import Rule
from headergrade.tokenizer import extract_directive_map


class XFrameOptionsRule(Rule):
    """X-Frame-Options: DENY beats SAMEORIGIN beats the deprecated ALLOW-FROM."""

    header_name = "x-frame-options"
    display_name = "X-Frame-Options"
    missing_message = "X-Frame-Options header missing; expect DENY or SAMEORIGIN."

    def inspect(self, value, context):
        normalized = value.strip("\"'").upper()
        notes = [Note(Level.DETAIL, self.observed(value))]

        if normalized == "DENY":
            status, multiplier = Status.PASS, 1.0
            notes.append(Note(Level.SUCCESS, "DENY prevents all framing, mitigating clickjacking."))
        elif normalized == "SAMEORIGIN":
            status, multiplier = Status.PARTIAL, 0.8
            notes.append(Note(Level.WARNING,
                              "SAMEORIGIN allows same-origin framing; add frame-ancestors to CSP "
                              "for granular control."))
        elif normalized.startswith("ALLOW-FROM"):
            status, multiplier = Status.PARTIAL, 0.4
            notes.append(Note(Level.WARNING,
                              f"{value} is deprecated and only honored by a subset of browsers. "
                              "Transition to CSP frame-ancestors."))
        else:
            status, multiplier = Status.FAIL, 0.0
            notes.append(Note(Level.FAIL,
                              f'Unrecognized X-Frame-Options directive "{value}". Use DENY or SAMEORIGIN.'))

        # Browsers that understand frame-ancestors ignore X-Frame-Options
        csp = context.headers.get("content-security-policy")
        if csp and "frame-ancestors" in extract_directive_map(csp):
            notes.append(Note(Level.INFO,
                              "CSP frame-ancestors is also set; modern browsers prefer it over "
                              "X-Frame-Options, so keep both policies consistent."))

        return Evaluation(context.weight * multiplier, status, tuple(notes))
