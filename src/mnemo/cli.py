"""
CLI entry point.

Commands:
- demo: Build a small memory system, search it and consolidate a cluster
- config: Print effective settings

Flags:
- --debug: Enable debug logging to file
"""

import logging
import sys

from mnemo.core.config import Settings, get_settings
from mnemo.core.logging import get_logger, setup_logging
from mnemo.memory.index import BruteForceVectorIndex
from mnemo.memory.store import InMemoryStore
from mnemo.memory.summarizer import concat_summarizer
from mnemo.memory.system import MemorySystem


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    settings = get_settings()

    debug_mode = "--debug" in args
    if debug_mode:
        args.remove("--debug")

    log_level = logging.DEBUG if debug_mode else logging.getLevelName(settings.log_level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    setup_logging(level=log_level, log_file=settings.log_path if debug_mode else None)
    logger = get_logger("cli")

    if not args:
        print("Usage: mnemo [--debug] <command>")
        print("Commands: demo, config")
        print("Flags: --debug (enable debug logging to data/mnemo.log)")
        return 1

    command = args[0]

    if command == "demo":
        logger.info("Running demo")
        return _demo(settings)

    if command == "config":
        for name, value in settings.model_dump().items():
            if name.endswith("api_key") and value:
                value = "***"
            print(f"{name} = {value}")
        return 0

    print(f"Unknown command: {command}")
    return 1


def _demo(settings: Settings) -> int:
    """Three memories, one search, one consolidation."""
    config = settings.system_config()
    system = MemorySystem(
        InMemoryStore(),
        BruteForceVectorIndex(limit=settings.index_limit),
        config,
    )

    a = system.add_memory("User prefers dark mode", [1.0, 0.0])
    b = system.add_memory("User enabled dark theme in the editor", [0.99, 0.01])
    system.add_memory("User lives in Lisbon", [0.0, 1.0])

    print("Search [1, 0]:")
    for memory, score in system.search([1.0, 0.0], top_k=2):
        print(f"  #{memory.id} {score:.4f} {memory.content}")

    central = system.get_memory(a)
    summarizer = concat_summarizer(lambda _text: central.embedding)
    abstract_id = system.consolidate(a, summarizer)
    abstract = system.get_memory(abstract_id)

    neighbors = sorted(system.graph.get_neighbors(abstract_id) or ())
    print(f"Consolidated #{abstract_id}: {abstract.content}")
    print(f"  edges -> {neighbors} (members #{a}, #{b} plus temporal link)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
