"""Command-line runner.

Provides:
- Settings loaded from the environment and `.env`
- Structured logging
- The `prun` CLI
"""
