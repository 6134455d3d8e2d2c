"""Volt: a Rails-like framework CLI for Python web projects.

Generated projects run on FastAPI + SQLModel + Alembic. The CLI creates them,
generates code into them and wraps the day-to-day tooling (server, REPL,
migrations, database containers).
"""

__version__ = "0.1.0"
