"""cave CLI: Typer-based command-line interface.

All output uses Rich; errors go to stderr and exit with status 1.
"""
