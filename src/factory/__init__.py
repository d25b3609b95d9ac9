"""Pass creation entry point.

This module validates top-level options, runs model normalization and
trust resolution together, and hands the result to a pass builder.
"""
