"""Application layer composing feature use cases."""
