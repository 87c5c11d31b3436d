"""User interfaces for msupack."""
