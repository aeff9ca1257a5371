"""Repository root helpers for statically known hosting services."""
