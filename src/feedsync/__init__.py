"""Summary feed synchronization controller."""
