"""
CLI Module.

Terminal front ends for the File Search API client.

Architecture:
- actions.py: one-shot handlers behind cli.py --action=... (Click)
- shell.py: numbered-menu interactive shell behind manager.py (Typer + Rich)
- selection.py: numbered item picker used by the shell
- All HTTP goes through filestore.api.client

Usage:
    python cli.py --action=list --key=...
    python manager.py
"""
