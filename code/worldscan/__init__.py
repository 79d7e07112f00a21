"""
worldscan: hierarchical world-map point-of-interest navigation.
"""

__version__ = '0.1.0'
