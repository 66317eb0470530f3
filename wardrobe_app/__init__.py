"""Wardrobe Coordinator application wiring, configuration and logging."""
