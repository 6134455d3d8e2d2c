"""Volt core: configuration, domain, naming conventions and generation services.

The core never prints: services return results and the CLI renders them.
"""
