"""
Srcnav: code navigation over per-commit analysis artifacts.

Srcnav reads the graph data that language toolchains write for each source
unit of a repository, enabling you to:
- Describe the definition behind the reference at a byte offset
- List every reference in a file
- Resolve definitions in other repositories through a definition service

Usage:
    from srcnav.config import load_settings
    from srcnav.core import Navigator
    from srcnav.remote import HTTPDefinitionClient

    settings = load_settings()
    with HTTPDefinitionClient(settings.api_url, settings.api_timeout) as client:
        nav = Navigator.for_file("src/app.py", settings, client)
        print(nav.describe("src/app.py", 120).to_dict())
"""

__version__ = "0.1.0"
