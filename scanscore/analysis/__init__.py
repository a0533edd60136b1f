"""Evidence analysis: deduplication, domain ownership, scoring, and reports."""
