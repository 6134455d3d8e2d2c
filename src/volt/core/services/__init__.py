"""Generation services.

Each service takes a `ProjectContext`, does its file work and returns a
`GenerationResult`; printing is left to the CLI.
"""

from volt.core.services.results import GenerationResult

__all__ = ["GenerationResult"]
