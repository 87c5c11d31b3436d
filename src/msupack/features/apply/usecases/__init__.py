"""Apply use cases: planning, negotiation, cancellation and the engine."""
