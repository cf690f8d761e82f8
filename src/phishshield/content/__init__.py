"""Bundled question bank resources."""
