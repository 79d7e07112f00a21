"""
Core scanner components.

- world: Tile map, geometry and world-object collaborators
- scanner: Region clustering, category building and the navigation session
"""
