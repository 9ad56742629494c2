"""Core data model, errors and host collaborators."""
