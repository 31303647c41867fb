"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import Cell, CellState, GameState, GridLayout

__all__ = ['Cell', 'CellState', 'GameState', 'GridLayout']
