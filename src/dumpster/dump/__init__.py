"""Dump generation: snapshot building and SQL rendering.

Usage:
    from dumpster.dump import build_snapshot, render, dump_database
"""

from dumpster.dump.assembler import build_snapshot, dump_database, render

__all__ = ["build_snapshot", "render", "dump_database"]
