"""Filename risk classifier."""

from __future__ import annotations

from collections.abc import Sequence

from cloudscan.domain import FileRecord, RiskMatch
from cloudscan.rules.catalog import DEFAULT_RULES, RiskRule


class Classifier:
    """Applies a rule table to file names.

    Only the record name is inspected; path and contents never are. Folder
    records are never classified.
    """

    def __init__(self, rules: Sequence[RiskRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[RiskRule, ...]:
        """The rule table, in matching order."""
        return self._rules

    def classify(self, record: FileRecord) -> tuple[RiskMatch, ...]:
        """Return one match per rule whose patterns hit the record's name.

        Args:
            record: Normalized file record.

        Returns:
            Matches in catalog order; empty for folders and clean names.
        """
        if record.is_folder:
            return ()
        return tuple(
            RiskMatch(rule.category, rule.severity, rule.description)
            for rule in self._rules
            if rule.matches(record.name)
        )
