"""Library use cases: PCM cache lookup and folder scanning."""
