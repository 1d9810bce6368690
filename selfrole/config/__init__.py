"""
Configuration Layer.

Settings loading (Pydantic Settings) and logging setup.
"""
