"""YAML keyword tables shipped with the package."""
