"""
Configuration module.

Default parameters, YAML-backed per-network overrides and validation.
"""
