"""YAML configuration: lease file, ndp command, status server bind address."""
