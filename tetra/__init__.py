"""
Tetra - Tetrahedral Dice Engine

A turn-based engine for tetrahedral dice tipped and spun across a board
of triangular cells. The engine provides:
- Die orientation tracking under spins and tips
- Speculative walk planning with undo and atomic commit
- Board adjacency and exclusive cell occupancy
- Sessions, a REST API and a command line
"""

__version__ = "0.1.0"
