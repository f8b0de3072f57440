"""
Command-line interface for AUTOCRUD_ENGINE.
"""
