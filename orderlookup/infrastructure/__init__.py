"""Infrastructure: in-memory resolution cache and SQL persistence."""
