"""Registry of header rules, keyed by lower-case header name."""

from types import MappingProxyType

from headergrade.rules.base import DefaultRule, EnumeratedRule, Findings, Rule
from headergrade.rules.clear_site_data import ClearSiteDataRule
from headergrade.rules.cross_origin import (
    CrossOriginEmbedderPolicyRule,
    CrossOriginOpenerPolicyRule,
    CrossOriginResourcePolicyRule,
    OriginAgentClusterRule,
)
from headergrade.rules.csp import ContentSecurityPolicyRule
from headergrade.rules.framing import XFrameOptionsRule
from headergrade.rules.hsts import StrictTransportSecurityRule
from headergrade.rules.keywords import (
    XContentTypeOptionsRule,
    XDnsPrefetchControlRule,
    XPermittedCrossDomainPoliciesRule,
)
from headergrade.rules.permissions import PermissionsPolicyRule
from headergrade.rules.referrer import ReferrerPolicyRule

DEFAULT_RULE = DefaultRule()


def build_registry(rules):
    """Index rule instances by their header name."""
    return MappingProxyType({rule.header_name: rule for rule in rules})


RULES = build_registry([
    ContentSecurityPolicyRule(),
    StrictTransportSecurityRule(),
    PermissionsPolicyRule(),
    ReferrerPolicyRule(),
    XContentTypeOptionsRule(),
    CrossOriginOpenerPolicyRule(),
    CrossOriginEmbedderPolicyRule(),
    CrossOriginResourcePolicyRule(),
    XFrameOptionsRule(),
    ClearSiteDataRule(),
    OriginAgentClusterRule(),
    XPermittedCrossDomainPoliciesRule(),
    XDnsPrefetchControlRule(),
])


def resolve(header_name, registry=RULES):
    """Return the dedicated rule for a header, or None."""
    return registry.get(header_name.lower())


def rule_for(header_name, registry=RULES):
    """Return the dedicated rule for a header, falling back to DEFAULT_RULE."""
    return resolve(header_name, registry) or DEFAULT_RULE


__all__ = [
    "DEFAULT_RULE",
    "RULES",
    "DefaultRule",
    "EnumeratedRule",
    "Findings",
    "Rule",
    "build_registry",
    "resolve",
    "rule_for",
]
