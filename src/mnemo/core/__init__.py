"""
Core module - configuration and logging.

Components:
- config: Settings management via pydantic-settings
- logging: Structured logging setup
"""
