"""EasyPeasy Labs - management API for a children's activity provider"""

__version__ = "1.0.0"
