import logging

from headergrade.config import DEFAULT_CATALOG
from headergrade.leaking import classify_leaking
from headergrade.models import AnalysisResult, HeaderEntry, RuleContext
from headergrade.normalizer import normalize, score_range
from headergrade.rules import DEFAULT_RULE, RULES, rule_for

logger = logging.getLogger(__name__)

BASE_SCORE = 50


def normalize_headers(headers):
    """Lower-case header names; later duplicates overwrite earlier ones."""
    return {str(name).lower(): str(value) for name, value in headers.items()}


class HeaderAnalyzer:
    """Scores a response's headers against an immutable catalog.

    The analyzer keeps no state between calls, so one instance can serve
    concurrent analyses.
    """

    def __init__(self, catalog=DEFAULT_CATALOG, base_score=BASE_SCORE, registry=RULES):
        self.catalog = catalog
        self.base_score = base_score
        self.registry = registry
        self.positive_weights, self.negative_weights = catalog.weights()
        # Reject a zero-width score range before any analysis runs
        score_range(base_score, self.positive_weights, self.negative_weights)

    def analyze(self, headers):
        """Classify and score a ``name -> value`` header map."""
        normalized = normalize_headers(headers)
        detected = []
        missing = []
        score = self.base_score

        for entry in self.catalog.security:
            value = normalized.get(entry.name)
            rule = rule_for(entry.name, self.registry)
            if rule is DEFAULT_RULE:
                logger.debug(f"No dedicated rule for {entry.name}; using presence check")
            evaluation = rule.evaluate(value, RuleContext(entry.name, entry.weight, normalized))
            score += evaluation.score_delta

            result = HeaderEntry(
                name=entry.name,
                value=value,
                present=value is not None,
                weight=entry.weight,
                status=evaluation.status,
                notes=evaluation.notes,
                score_delta=evaluation.score_delta,
            )
            if value is None:
                missing.append(result)
            else:
                detected.append(result)

        leaking, penalty = classify_leaking(normalized, self.catalog.leaking)
        score += penalty

        known = self.catalog.names()
        for name, value in normalized.items():
            if name not in known:
                detected.append(HeaderEntry(name=name, value=value, present=True, weight=0))

        normalized_score = normalize(score, self.base_score, self.positive_weights, self.negative_weights)
        logger.debug(f"Raw score {score:.2f}, normalized {normalized_score:.2f}")

        return AnalysisResult(
            detected=detected,
            missing=missing,
            leaking=leaking,
            score=normalized_score,
            raw_score=score,
        )
