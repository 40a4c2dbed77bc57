"""
emover - Emoji Remover.

Scans files and directories for emoji and symbol codepoints and strips them
in place after confirmation:
- core.scanner: codepoint classification and path enumeration
- core.engine: per-file transformation and the parallel batch executor
- core.loader: run configuration and the optional .emover.yaml file
- cli: the ``emover`` command
"""
