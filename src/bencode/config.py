"""
Library-wide defaults. Every limit here can be overridden per call.
"""

# Lists and dicts nested deeper than this are refused.
DEFAULT_MAX_DEPTH = 256

# None means no cap on encoded output size.
DEFAULT_MAX_SIZE = None
