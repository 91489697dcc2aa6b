"""querydesk: run ad-hoc SQL and keep a bounded query history."""

__version__ = "0.1.0"
