"""State/store layer.

This package holds the current value of every tracked collection and,
separately, the value each collection had at the end of the previous
evaluation pass.  Whole-collection replaces are the only write path.
"""
