"""
Resume Studio - form-driven résumé editor with live preview and AI drafts.

Layout:
- schemas: résumé document model and API payloads
- editor: section editors, working-copy form state and editor sessions
- preview: HTML preview renderer and print surface
- generation: AI draft generator adapters
- store: users and résumés persistence
"""

__version__ = "0.1.0"
