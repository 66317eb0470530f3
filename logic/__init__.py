"""Outfit selection, prompting and validation logic."""
