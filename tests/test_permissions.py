import pytest

from headergrade.models import Level, RuleContext, Status
from headergrade.rules.permissions import CRITICAL_FEATURES, PermissionsPolicyRule, grade_feature

rule = PermissionsPolicyRule()


def evaluate(value, weight=10):
    return rule.evaluate(value, RuleContext(rule.header_name, weight, {}))


def deny_all(**overrides):
    parts = []
    for feature in CRITICAL_FEATURES:
        parts.append(f"{feature}={overrides.get(feature, '()')}")
    return ", ".join(parts)


@pytest.mark.parametrize("tokens,grade", [
    (None, "absent"),
    ([], "deny"),
    (["none"], "deny"),
    (["*"], "wildcard"),
    (["self"], "scoped"),
    (["self", "https://a.example.com"], "scoped"),
])
def test_grade_feature(tokens, grade):
    assert grade_feature(tokens) == grade


def test_everything_denied_passes():
    evaluation = evaluate(deny_all())
    assert evaluation.status is Status.PASS
    assert evaluation.score_delta == 10
    assert evaluation.notes[-1].level is Level.SUCCESS


def test_partial_list_warns():
    evaluation = evaluate("camera=(), microphone=()")
    assert evaluation.status is Status.PARTIAL
    assert evaluation.score_delta == pytest.approx(6)
    warnings = [n.message for n in evaluation.notes if n.level is Level.WARNING]
    assert len(warnings) == len(CRITICAL_FEATURES) - 2


def test_self_scoped_feature_warns():
    evaluation = evaluate(deny_all(geolocation="(self)"))
    assert evaluation.status is Status.PARTIAL
    assert any("geolocation" in n.message for n in evaluation.notes if n.level is Level.WARNING)


@pytest.mark.parametrize("allowlist", ["*", "(*)"])
def test_wildcard_feature_fails(allowlist):
    evaluation = evaluate(deny_all(camera=allowlist))
    assert evaluation.status is Status.FAIL
    assert evaluation.score_delta == 0


def test_unparsable_value_fails():
    evaluation = evaluate("camera 'none'")
    assert evaluation.status is Status.FAIL
    assert evaluation.score_delta == 0
