"""Cross-origin isolation headers: COOP, COEP, CORP and Origin-Agent-Cluster."""

from headergrade.models import Status
from headergrade.rules.base import EnumeratedRule


class CrossOriginOpenerPolicyRule(EnumeratedRule):
    header_name = "cross-origin-opener-policy"
    display_name = "Cross-Origin-Opener-Policy"
    missing_message = ("Cross-Origin-Opener-Policy header missing; "
                       "document cannot guarantee cross-origin isolation.")
    grades = {
        "same-origin": (Status.PASS, 1.0,
                        "same-origin provides full cross-origin isolation for popup windows."),
        "same-origin-allow-popups": (Status.PARTIAL, 0.6,
                                     "same-origin-allow-popups permits popups to reattach to the opener; "
                                     "use same-origin for stronger isolation."),
        "unsafe-none": (Status.FAIL, 0.0,
                        "unsafe-none disables cross-origin opener protection, "
                        "enabling speculative side-channel attacks."),
    }
    fallback_message = 'Unrecognized COOP value "{value}". Prefer same-origin for robust isolation.'


class CrossOriginEmbedderPolicyRule(EnumeratedRule):
    header_name = "cross-origin-embedder-policy"
    display_name = "Cross-Origin-Embedder-Policy"
    missing_message = ("Cross-Origin-Embedder-Policy header missing; "
                       "SharedArrayBuffer isolation not guaranteed.")
    grades = {
        "require-corp": (Status.PASS, 1.0,
                         "require-corp blocks cross-origin resources without CORP/COEP headers, "
                         "enabling shared memory features."),
        "credentialless": (Status.PARTIAL, 0.7,
                           "credentialless allows cross-origin resources without credentials; "
                           "verify this aligns with isolation goals."),
        "unsafe-none": (Status.FAIL, 0.0,
                        "unsafe-none disables COEP protections; "
                        "cross-origin resources may leak sensitive data."),
    }
    fallback_message = ('Unrecognized COEP value "{value}". '
                        'Prefer require-corp for robust cross-origin isolation.')


class CrossOriginResourcePolicyRule(EnumeratedRule):
    header_name = "cross-origin-resource-policy"
    display_name = "Cross-Origin-Resource-Policy"
    missing_message = ("Cross-Origin-Resource-Policy header missing; "
                       "browsers may share resources with any origin.")
    grades = {
        "same-origin": (Status.PASS, 1.0,
                        "same-origin ensures responses are only shared with the origin that served them."),
        "same-site": (Status.PARTIAL, 0.7,
                      "same-site allows subdomains to consume responses. "
                      "Prefer same-origin for stricter isolation."),
        "cross-origin": (Status.FAIL, 0.0,
                         "cross-origin shares responses with any origin, negating CORP protections."),
    }
    fallback_message = ('Unrecognized CORP value "{value}". '
                        'Use same-origin to prevent cross-origin data leaks.')


class OriginAgentClusterRule(EnumeratedRule):
    header_name = "origin-agent-cluster"
    display_name = "Origin-Agent-Cluster"
    missing_message = ("Origin-Agent-Cluster header missing; the origin may share an agent "
                       "cluster with same-site pages.")
    grades = {
        "?1": (Status.PASS, 1.0,
               "?1 requests an origin-keyed agent cluster, isolating this origin from same-site pages."),
        "?0": (Status.FAIL, 0.0,
               "?0 explicitly opts out of origin-keyed agent clusters."),
    }
    fallback_message = ('Unrecognized Origin-Agent-Cluster value "{value}". '
                        'Use the structured boolean ?1.')
