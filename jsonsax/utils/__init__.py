"""Configuration and output helpers for jsonsax."""
