"""Leading-keyword statement classification."""

import re
from typing import Optional

from querydesk.models.query import StatementKind

DEFAULT_MIN_LENGTH = 3


class StatementClassifier:
    """Assign a coarse statement kind from the leading keyword.

    A keyword only counts when followed by whitespace, so ``SELECTOR x``
    and ``SELECT(1)`` are both UNKNOWN.
    """

    # Checked in order; the first match wins
    KEYWORD_PATTERNS = [
        (StatementKind.SELECT, r"^\s*SELECT\s+"),
        (StatementKind.INSERT, r"^\s*INSERT\s+"),
        (StatementKind.UPDATE, r"^\s*UPDATE\s+"),
        (StatementKind.DELETE, r"^\s*DELETE\s+"),
        (StatementKind.CREATE, r"^\s*CREATE\s+"),
        (StatementKind.DROP, r"^\s*DROP\s+"),
    ]

    def __init__(self, min_length: int = DEFAULT_MIN_LENGTH):
        """Initialize the classifier.

        Args:
            min_length: Shortest trimmed text accepted by is_valid_query.
        """
        self.min_length = min_length
        self._compiled_patterns = [
            (kind, re.compile(pattern, re.IGNORECASE))
            for kind, pattern in self.KEYWORD_PATTERNS
        ]

    def classify(self, sql: Optional[str]) -> StatementKind:
        """Classify an SQL statement by its leading keyword.

        Args:
            sql: Raw SQL text.

        Returns:
            The matching statement kind, or UNKNOWN.
        """
        if sql is None:
            return StatementKind.UNKNOWN

        trimmed = sql.strip()
        if not trimmed:
            return StatementKind.UNKNOWN

        for kind, pattern in self._compiled_patterns:
            if pattern.search(trimmed):
                return kind

        return StatementKind.UNKNOWN

    def is_valid_query(self, sql: Optional[str]) -> bool:
        """Check that the text is long enough and has a known kind.

        Args:
            sql: Raw SQL text.

        Returns:
            True if the statement may be submitted for execution.
        """
        if sql is None:
            return False

        trimmed = sql.strip()
        if len(trimmed) < self.min_length:
            return False

        return self.classify(trimmed) != StatementKind.UNKNOWN

    def is_read_only(self, sql: Optional[str]) -> bool:
        return self.classify(sql) == StatementKind.SELECT


_default_classifier = StatementClassifier()


def classify(sql: Optional[str]) -> StatementKind:
    """Classify SQL text with the default classifier."""
    return _default_classifier.classify(sql)


def is_valid_query(sql: Optional[str]) -> bool:
    return _default_classifier.is_valid_query(sql)


def is_read_only(sql: Optional[str]) -> bool:
    return _default_classifier.is_read_only(sql)
