from headergrade.models import RuleContext, Status
from headergrade.rules import DEFAULT_RULE, RULES, build_registry, resolve, rule_for
from headergrade.rules.csp import ContentSecurityPolicyRule
from headergrade.rules.framing import XFrameOptionsRule


def test_registry_covers_all_rules():
    assert len(RULES) == 13
    for name, rule in RULES.items():
        assert name == rule.header_name
        assert name == name.lower()


def test_resolve_is_case_insensitive():
    assert isinstance(resolve("Content-Security-Policy"), ContentSecurityPolicyRule)


def test_unregistered_header_falls_back_to_default():
    assert resolve("x-xss-protection") is None
    assert rule_for("x-xss-protection") is DEFAULT_RULE


def test_custom_registry():
    registry = build_registry([XFrameOptionsRule()])
    assert isinstance(resolve("x-frame-options", registry), XFrameOptionsRule)
    assert resolve("content-security-policy", registry) is None


def test_default_rule_grades_blank_values_as_unknown():
    context = RuleContext("x-xss-protection", 5, {})
    assert DEFAULT_RULE.evaluate("1; mode=block", context).status is Status.PASS
    blank = DEFAULT_RULE.evaluate("  ", context)
    assert blank.status is Status.UNKNOWN
    assert blank.score_delta == 0
