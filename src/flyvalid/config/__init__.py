"""flyvalid configuration properties."""
