"""Domain layer - entities, errors and repository protocols."""
