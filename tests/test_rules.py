import pytest

from headergrade.models import Level, RuleContext, Status
from headergrade.rules import DEFAULT_RULE, RULES
from headergrade.rules.clear_site_data import ClearSiteDataRule
from headergrade.rules.cross_origin import (
    CrossOriginEmbedderPolicyRule,
    CrossOriginOpenerPolicyRule,
    CrossOriginResourcePolicyRule,
    OriginAgentClusterRule,
)
from headergrade.rules.framing import XFrameOptionsRule
from headergrade.rules.hsts import StrictTransportSecurityRule
from headergrade.rules.keywords import (
    XContentTypeOptionsRule,
    XDnsPrefetchControlRule,
    XPermittedCrossDomainPoliciesRule,
)
from headergrade.rules.referrer import ReferrerPolicyRule


def evaluate(rule, value, weight=10, headers=None):
    return rule.evaluate(value, RuleContext(rule.header_name, weight, headers or {}))


def levels(evaluation):
    return [note.level for note in evaluation.notes]


@pytest.mark.parametrize("rule", list(RULES.values()), ids=list(RULES))
def test_absent_header_is_missing_with_zero_credit(rule):
    evaluation = evaluate(rule, None)
    assert evaluation.status is Status.MISSING
    assert evaluation.score_delta == 0
    assert len(evaluation.notes) == 1


@pytest.mark.parametrize("rule", list(RULES.values()), ids=list(RULES))
def test_blank_header_is_unknown(rule):
    evaluation = evaluate(rule, "   ")
    assert evaluation.status is Status.UNKNOWN
    assert evaluation.score_delta == 0
    assert evaluation.notes


@pytest.mark.parametrize("rule", list(RULES.values()), ids=list(RULES))
def test_present_header_notes_start_with_observed_value(rule):
    evaluation = evaluate(rule, "something-odd")
    assert evaluation.notes[0].level is Level.DETAIL
    assert "something-odd" in evaluation.notes[0].message
    assert 0 <= evaluation.score_delta <= 10


def test_default_rule_credits_presence():
    context = RuleContext("x-xss-protection", 5, {})
    present = DEFAULT_RULE.evaluate("1; mode=block", context)
    assert present.status is Status.PASS
    assert present.score_delta == 5

    absent = DEFAULT_RULE.evaluate(None, context)
    assert absent.status is Status.MISSING
    assert absent.score_delta == 0


class TestXFrameOptions:
    rule = XFrameOptionsRule()

    def test_deny(self):
        evaluation = evaluate(self.rule, "DENY")
        assert evaluation.status is Status.PASS
        assert evaluation.score_delta == 10

    def test_quoted_deny(self):
        assert evaluate(self.rule, "'deny'").status is Status.PASS

    def test_sameorigin(self):
        evaluation = evaluate(self.rule, "sameorigin")
        assert evaluation.status is Status.PARTIAL
        assert evaluation.score_delta == pytest.approx(8)

    def test_allow_from_is_deprecated(self):
        evaluation = evaluate(self.rule, "ALLOW-FROM https://example.com", weight=5)
        assert evaluation.status is Status.PARTIAL
        assert evaluation.score_delta == pytest.approx(2)
        assert "deprecated" in evaluation.notes[-1].message

    def test_garbage(self):
        evaluation = evaluate(self.rule, "allowall")
        assert evaluation.status is Status.FAIL
        assert evaluation.score_delta == 0
        assert Level.FAIL in levels(evaluation)

    def test_mentions_csp_frame_ancestors(self):
        headers = {"content-security-policy": "frame-ancestors 'none'"}
        evaluation = evaluate(self.rule, "DENY", headers=headers)
        assert evaluation.notes[-1].level is Level.INFO
        assert "frame-ancestors" in evaluation.notes[-1].message


class TestXContentTypeOptions:
    rule = XContentTypeOptionsRule()

    def test_nosniff(self):
        evaluation = evaluate(self.rule, "NoSniff")
        assert evaluation.status is Status.PASS
        assert evaluation.score_delta == 10

    @pytest.mark.parametrize("value", ["0", "off"])
    def test_disabled(self, value):
        evaluation = evaluate(self.rule, value)
        assert evaluation.status is Status.FAIL
        assert evaluation.score_delta == 0

    def test_unexpected(self):
        evaluation = evaluate(self.rule, "nosniff, nosniff")
        assert evaluation.status is Status.PARTIAL
        assert evaluation.score_delta == pytest.approx(3)


class TestReferrerPolicy:
    rule = ReferrerPolicyRule()

    @pytest.mark.parametrize("value,status,delta", [
        ("no-referrer", Status.PASS, 10),
        ("Strict-Origin-When-Cross-Origin", Status.PASS, 10),
        ("origin", Status.PARTIAL, 6),
        ("no-referrer-when-downgrade", Status.PARTIAL, 6),
        ("unsafe-url", Status.FAIL, 0),
        ("whatever", Status.PARTIAL, 4),
    ])
    def test_classification(self, value, status, delta):
        evaluation = evaluate(self.rule, value)
        assert evaluation.status is status
        assert evaluation.score_delta == pytest.approx(delta)

    def test_only_first_token_counts(self):
        evaluation = evaluate(self.rule, "strict-origin, unsafe-url")
        assert evaluation.status is Status.PASS
        assert evaluation.notes[0].message == "Effective policy: strict-origin"
        assert any("first token" in note.message for note in evaluation.notes)

    def test_no_tokens(self):
        evaluation = evaluate(self.rule, " , ,")
        assert evaluation.status is Status.FAIL
        assert evaluation.score_delta == 0


class TestStrictTransportSecurity:
    rule = StrictTransportSecurityRule()

    def test_strong_policy(self):
        evaluation = evaluate(self.rule, "max-age=63072000; includeSubDomains; preload")
        assert evaluation.status is Status.PASS
        assert evaluation.score_delta == 10
        assert levels(evaluation) == [Level.DETAIL, Level.INFO, Level.SUCCESS]

    def test_quoted_max_age(self):
        evaluation = evaluate(self.rule, 'max-age="31536000"; includesubdomains')
        assert evaluation.status is Status.PASS

    @pytest.mark.parametrize("value,fragment", [
        ("includeSubDomains", "Missing max-age"),
        ("max-age=abc; includeSubDomains", "Unable to parse"),
        ("max-age=-1; includeSubDomains", "Unable to parse"),
        ("max-age=0; includeSubDomains", "zero or negative"),
        ("max-age=3600; includeSubDomains", "below 86400"),
    ])
    def test_failures(self, value, fragment):
        evaluation = evaluate(self.rule, value)
        assert evaluation.status is Status.FAIL
        assert evaluation.score_delta == 0
        assert any(fragment in note.message for note in evaluation.notes)

    @pytest.mark.parametrize("value", [
        "max-age=86400; includeSubDomains",
        "max-age=20000000; includeSubDomains",
        "max-age=31536000",
    ])
    def test_warnings(self, value):
        evaluation = evaluate(self.rule, value)
        assert evaluation.status is Status.PARTIAL
        assert evaluation.score_delta == pytest.approx(6)

    def test_failure_outranks_warning(self):
        evaluation = evaluate(self.rule, "max-age=0")
        assert evaluation.status is Status.FAIL
        assert levels(evaluation) == [Level.DETAIL, Level.FAIL, Level.WARNING]


class TestClearSiteData:
    rule = ClearSiteDataRule()

    def test_scoped_list(self):
        evaluation = evaluate(self.rule, '"cache", "cookies"')
        assert evaluation.status is Status.PASS
        assert evaluation.score_delta == 10
        assert "cache, cookies" in evaluation.notes[-1].message

    def test_wildcard(self):
        evaluation = evaluate(self.rule, '"*"')
        assert evaluation.status is Status.PARTIAL
        assert evaluation.score_delta == pytest.approx(6)

    def test_unknown_directive(self):
        evaluation = evaluate(self.rule, '"cache", "bogus"')
        assert evaluation.status is Status.PARTIAL
        assert any("bogus" in note.message for note in evaluation.notes)

    def test_empty_list(self):
        evaluation = evaluate(self.rule, '""')
        assert evaluation.status is Status.FAIL
        assert evaluation.score_delta == 0


@pytest.mark.parametrize("rule_class,value,status,multiplier", [
    (CrossOriginOpenerPolicyRule, "same-origin", Status.PASS, 1.0),
    (CrossOriginOpenerPolicyRule, "same-origin-allow-popups", Status.PARTIAL, 0.6),
    (CrossOriginOpenerPolicyRule, "unsafe-none", Status.FAIL, 0.0),
    (CrossOriginOpenerPolicyRule, "noopener-allow-popups", Status.PARTIAL, 0.4),
    (CrossOriginEmbedderPolicyRule, "require-corp", Status.PASS, 1.0),
    (CrossOriginEmbedderPolicyRule, "credentialless", Status.PARTIAL, 0.7),
    (CrossOriginEmbedderPolicyRule, "unsafe-none", Status.FAIL, 0.0),
    (CrossOriginEmbedderPolicyRule, "require-everything", Status.PARTIAL, 0.4),
    (CrossOriginResourcePolicyRule, "same-origin", Status.PASS, 1.0),
    (CrossOriginResourcePolicyRule, "same-site", Status.PARTIAL, 0.7),
    (CrossOriginResourcePolicyRule, "cross-origin", Status.FAIL, 0.0),
    (CrossOriginResourcePolicyRule, "nobody", Status.PARTIAL, 0.4),
    (OriginAgentClusterRule, "?1", Status.PASS, 1.0),
    (OriginAgentClusterRule, "?0", Status.FAIL, 0.0),
    (OriginAgentClusterRule, "yes", Status.PARTIAL, 0.4),
    (XPermittedCrossDomainPoliciesRule, "none", Status.PASS, 1.0),
    (XPermittedCrossDomainPoliciesRule, "master-only", Status.PARTIAL, 0.6),
    (XPermittedCrossDomainPoliciesRule, "by-content-type", Status.PARTIAL, 0.4),
    (XPermittedCrossDomainPoliciesRule, "by-ftp-filename", Status.PARTIAL, 0.4),
    (XPermittedCrossDomainPoliciesRule, "all", Status.FAIL, 0.0),
    (XPermittedCrossDomainPoliciesRule, "some", Status.PARTIAL, 0.4),
    (XDnsPrefetchControlRule, "off", Status.PASS, 1.0),
    (XDnsPrefetchControlRule, "0", Status.PASS, 1.0),
    (XDnsPrefetchControlRule, "on", Status.PARTIAL, 0.3),
    (XDnsPrefetchControlRule, "1", Status.PARTIAL, 0.3),
    (XDnsPrefetchControlRule, "maybe", Status.PARTIAL, 0.4),
])
def test_keyword_rules(rule_class, value, status, multiplier):
    evaluation = evaluate(rule_class(), value)
    assert evaluation.status is status
    assert evaluation.score_delta == pytest.approx(10 * multiplier)
    assert len(evaluation.notes) == 2


def test_keyword_rule_fallback_note_quotes_value():
    evaluation = evaluate(CrossOriginOpenerPolicyRule(), "Weird")
    assert evaluation.notes[-1].level is Level.WARNING
    assert '"Weird"' in evaluation.notes[-1].message
