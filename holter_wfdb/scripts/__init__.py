"""Command-line tooling (non-interactive, scriptable entry points)."""
