"""
Mnemo - associative memory engine for AI agents.

Package structure:
- core: Configuration and logging
- memory: Records, vector index, relationship graph, decay and consolidation
- cli: Command line entry point
"""

__version__ = "0.1.0"
