"""
Session Module - Manages in-memory game sessions.

A session represents one play-through:
- Created with a board, players and rolled dice
- Holds the game state and the reducer that changes it
- Dropped when the game ends
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
