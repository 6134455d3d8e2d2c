"""Adapters: filesystem templates, subprocesses, registration files, docker."""
