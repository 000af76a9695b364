"""Timeline computation services."""
