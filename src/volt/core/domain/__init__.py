"""Domain models for Volt.

Pure data (Pydantic v2 and enums): no filesystem, subprocess or CLI here.
"""
