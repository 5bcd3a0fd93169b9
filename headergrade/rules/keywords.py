"""Single-keyword legacy headers."""

from headergrade.models import Status
from headergrade.rules.base import EnumeratedRule


class XContentTypeOptionsRule(EnumeratedRule):
    header_name = "x-content-type-options"
    display_name = "X-Content-Type-Options"
    missing_message = 'X-Content-Type-Options header missing; expect "nosniff" for success.'
    grades = {
        "nosniff": (Status.PASS, 1.0,
                    "nosniff prevents MIME-sniffing attacks on stylesheets and scripts."),
        "0": (Status.FAIL, 0.0,
              "X-Content-Type-Options is explicitly disabled ({value}); "
              "browsers may sniff dangerous MIME types."),
        "off": (Status.FAIL, 0.0,
                "X-Content-Type-Options is explicitly disabled ({value}); "
                "browsers may sniff dangerous MIME types."),
    }
    fallback_multiplier = 0.3
    fallback_message = 'Unexpected directive "{value}". Use nosniff to ensure consistent MIME enforcement.'


class XPermittedCrossDomainPoliciesRule(EnumeratedRule):
    header_name = "x-permitted-cross-domain-policies"
    display_name = "X-Permitted-Cross-Domain-Policies"
    missing_message = 'X-Permitted-Cross-Domain-Policies header missing; expecting "none" ideally.'
    grades = {
        "none": (Status.PASS, 1.0,
                 "none blocks Flash/Adobe cross-domain policy files entirely."),
        "master-only": (Status.PARTIAL, 0.6,
                        "master-only allows a single policy file; legacy Flash clients may still "
                        "request data. Prefer none."),
        "by-content-type": (Status.PARTIAL, 0.4,
                            "{value} restricts policies but still enables certain cross-domain requests. "
                            "Use none to disable completely."),
        "by-ftp-filename": (Status.PARTIAL, 0.4,
                            "{value} restricts policies but still enables certain cross-domain requests. "
                            "Use none to disable completely."),
        "all": (Status.FAIL, 0.0,
                "all allows any cross-domain policy file, exposing old Flash attack surface."),
    }
    fallback_message = ('Unrecognized X-Permitted-Cross-Domain-Policies value "{value}". '
                        'Use none to disable cross-domain policy files.')


class XDnsPrefetchControlRule(EnumeratedRule):
    header_name = "x-dns-prefetch-control"
    display_name = "X-DNS-Prefetch-Control"
    missing_message = ("X-DNS-Prefetch-Control header missing; "
                       "browsers decide on their own whether to prefetch DNS.")
    grades = {
        "off": (Status.PASS, 1.0,
                "DNS prefetching disabled to avoid leaking hostname metadata in advance."),
        "0": (Status.PASS, 1.0,
              "DNS prefetching disabled to avoid leaking hostname metadata in advance."),
        "on": (Status.PARTIAL, 0.3,
               "DNS prefetching is enabled; disable it unless speculative lookups are required."),
        "1": (Status.PARTIAL, 0.3,
              "DNS prefetching is enabled; disable it unless speculative lookups are required."),
    }
    fallback_message = ('Unrecognized X-DNS-Prefetch-Control directive "{value}". '
                        'Use off to prevent speculative lookups.')
