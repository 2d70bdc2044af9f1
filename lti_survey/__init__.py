"""
Runtime will load the LTI survey launch provider from here.
"""

__version__ = '1.0.0'
