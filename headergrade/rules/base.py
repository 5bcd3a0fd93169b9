"""Building blocks shared by every header rule."""

from abc import ABC, abstractmethod

from headergrade.models import Evaluation, Level, Note, Status


class Findings:
    """Collects failures, warnings and remarks, then turns them into a verdict."""

    def __init__(self):
        self.failures = []
        self.warnings = []
        self.remarks = []

    def fail(self, message):
        self.failures.append(message)

    def warn(self, message):
        self.warnings.append(message)

    def info(self, message):
        self.remarks.append(message)

    @property
    def status(self):
        if self.failures:
            return Status.FAIL
        if self.warnings:
            return Status.PARTIAL
        return Status.PASS

    def notes(self, observed=None, success=None):
        notes = []
        if observed:
            notes.append(Note(Level.DETAIL, observed))
        notes.extend(Note(Level.FAIL, m) for m in self.failures)
        notes.extend(Note(Level.WARNING, m) for m in self.warnings)
        notes.extend(Note(Level.INFO, m) for m in self.remarks)
        if success and not self.failures and not self.warnings:
            notes.append(Note(Level.SUCCESS, success))
        return tuple(notes)


class Rule(ABC):
    """Evaluates one security header.

    Subclasses set ``header_name``, ``display_name`` and ``missing_message``
    and implement :meth:`inspect`, which only ever sees a non-blank value.
    """

    header_name = ""
    display_name = ""
    missing_message = ""

    def evaluate(self, value, context):
        if value is None:
            return Evaluation(0, Status.MISSING, (Note(Level.WARNING, self.missing_message),))
        if not value.strip():
            return Evaluation(0, Status.UNKNOWN, (
                Note(Level.WARNING, f"{self.display_name} header is present but empty; browsers ignore it."),
            ))
        return self.inspect(value.strip(), context)

    @abstractmethod
    def inspect(self, value, context):
        """Return an Evaluation for a present, non-blank header value."""
        ...

    def observed(self, value):
        return f"Observed {self.display_name}: {value}"

    def verdict(self, findings, value, context, multipliers, success=None):
        """Score a Findings collection using a status -> multiplier table."""
        status = findings.status
        return Evaluation(
            context.weight * multipliers[status],
            status,
            findings.notes(self.observed(value), success),
        )

    def __repr__(self):
        return f"<{type(self).__name__} {self.header_name}>"


class EnumeratedRule(Rule):
    """A header whose value is one keyword out of a short, known list.

    ``grades`` maps a normalized value to ``(status, multiplier, message)``.
    Anything not listed earns ``fallback_multiplier`` with a warning.
    """

    grades = {}
    fallback_multiplier = 0.4
    fallback_message = ""

    def normalize(self, value):
        return value.strip().strip("\"'").lower()

    def inspect(self, value, context):
        grade = self.grades.get(self.normalize(value))
        if grade is None:
            status, multiplier = Status.PARTIAL, self.fallback_multiplier
            note = Note(Level.WARNING, self.fallback_message.format(value=value))
        else:
            status, multiplier, message = grade
            level = {
                Status.PASS: Level.SUCCESS,
                Status.PARTIAL: Level.WARNING,
                Status.FAIL: Level.FAIL,
            }[status]
            note = Note(level, message.format(value=value))
        return Evaluation(
            context.weight * multiplier,
            status,
            (Note(Level.DETAIL, self.observed(value)), note),
        )


class DefaultRule(Rule):
    """Used for configured headers that have no dedicated rule: presence is enough."""

    def evaluate(self, value, context):
        if value is None:
            return Evaluation(0, Status.MISSING, (
                Note(Level.WARNING, f"{context.header_name} header missing."),
            ))
        if not value.strip():
            return Evaluation(0, Status.UNKNOWN, (
                Note(Level.WARNING, f"{context.header_name} header is present but empty; browsers ignore it."),
            ))
        return self.inspect(value.strip(), context)

    def inspect(self, value, context):
        return Evaluation(context.weight, Status.PASS, (
            Note(Level.DETAIL, f"Observed {context.header_name}: {value}"),
            Note(Level.INFO, "No dedicated check for this header; presence is credited in full."),
        ))
