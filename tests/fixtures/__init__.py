"""Shared test helpers: repository factory and in-memory git provider."""
