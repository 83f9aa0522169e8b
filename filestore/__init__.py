"""
File Store Manager.

- core/: Configuration, logging, exceptions
- api/: HTTP client for the Gemini File Search API
- services/: Folder upload with operation polling
- cli/: One-shot actions and the interactive menu shell (Click, Typer + Rich)
"""
