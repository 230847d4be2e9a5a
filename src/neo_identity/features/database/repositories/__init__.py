"""Repository base classes."""
