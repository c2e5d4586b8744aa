"""
terminal-clock
Full-screen terminal clock, stopwatch and countdown with big block digits
"""

__version__ = "0.3.0"
