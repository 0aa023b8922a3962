"""CLI command modules.

This package contains:
- setup: Coloured group, error reporting, setup and configure commands
- lights: Light listing and lookup commands (lights, light)
- request: Raw GET command (get)
"""
