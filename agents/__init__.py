"""Recommendation agents."""
