"""
Storage modules for punch card decks.

This package contains file handling:
- deck_file: Binary deck file reader and writer
- validator: Deck file validation
- listing: Text listings of decks
"""
