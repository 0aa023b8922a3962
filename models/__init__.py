"""Data models and utility functions.

This package contains:
- types: Resource type names, Light dataclasses, AuthCredentials
- utils: Client construction and output helpers for the CLI
"""
