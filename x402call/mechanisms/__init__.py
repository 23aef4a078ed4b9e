"""Payment mechanisms."""
