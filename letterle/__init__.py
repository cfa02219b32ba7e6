"""
Letterle - Daily Letter Guessing Game

A single-player daily game: one hidden letter per day, guessed until found.
The package provides:
- The session state machine (reducer)
- Day-boundary reconciliation against a local persisted record
- Statistics, tile feedback and share text
- A terminal CLI and a small REST API over one local session
"""

__version__ = "0.1.0"
