"""Core utilities and shared infrastructure.

- config: Settings loading, validation and the keep-resource flag
- constants: Named constants for settings, tools and fixed Azure options
- exceptions: Custom exception hierarchy
- prerequisites: External tool availability checks
"""
