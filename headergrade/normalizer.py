from headergrade.exceptions import DegenerateCatalogError


def score_range(base, positive_weights, negative_weights):
    """Return the (min, max) raw score a catalog can produce."""
    maximum = base + sum(positive_weights)
    minimum = base + sum(negative_weights)
    if maximum == minimum:
        raise DegenerateCatalogError(
            f"catalog has a zero-width score range (min == max == {minimum}); "
            "configure at least one non-zero weight"
        )
    return minimum, maximum


def normalize(raw, base, positive_weights, negative_weights):
    """Rescale a raw score onto 0-100 using the catalog's min/max, clamped."""
    minimum, maximum = score_range(base, positive_weights, negative_weights)
    normalized = (raw - minimum) / (maximum - minimum) * 100
    return max(0.0, min(100.0, normalized))
