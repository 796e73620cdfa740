"""
notetui: a terminal note manager.

Notes live as individual markdown files in ``~/.notes``; the creation time
and title are encoded in each filename.
"""

from .app import NoteApp, main

__version__ = "0.1.0"
__all__ = ['NoteApp', 'main']
