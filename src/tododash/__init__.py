"""TodoDash - personal productivity backend with categories, tags and bulk edits."""

__version__ = "0.1.0"
