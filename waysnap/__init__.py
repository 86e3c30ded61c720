"""
waysnap - nearest point on an OpenStreetMap road network
"""

__version__ = "1.0.0"
