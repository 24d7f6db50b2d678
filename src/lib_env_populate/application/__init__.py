"""Application layer: capability ports and the populate algorithm."""
