"""Trust material resolution.

This module validates certificate specs, reads certificate files and
parses them into signing-ready certificate and key objects.
"""
