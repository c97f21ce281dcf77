"""
Paper library search package.

Locates papers in a personal library by approximate title match and by
full-text search inside their PDF bodies, optionally narrowed by tags.
"""

__version__ = "1.0.0"
