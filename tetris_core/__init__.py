"""Tetris board and piece core with transactional undo for move search."""
