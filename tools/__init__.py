"""Store, image and model adapters."""
