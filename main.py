#!/usr/bin/env python3
"""
notetui - A Terminal User Interface for Managing Notes

Browse, create, edit and delete short notes stored as markdown files in
~/.notes, with a filterable list on the left and the note on the right.

Requirements:
    - Python 3.8+
    - prompt_toolkit: pip install prompt_toolkit

Usage:
    python main.py
"""

from notetui.app import main

if __name__ == "__main__":
    main()
