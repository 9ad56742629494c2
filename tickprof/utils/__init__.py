"""Import, environment, config and filesystem helpers."""
