"""Model bundle normalization.

This module reads pass models from directories or in-memory file maps
and partitions them into base bundle files and localization folders.
"""
