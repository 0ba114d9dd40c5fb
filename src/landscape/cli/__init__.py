"""
Command line interface for landscape.
"""
