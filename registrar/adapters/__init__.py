"""Infrastructure adapters - Implementations of domain ports."""
