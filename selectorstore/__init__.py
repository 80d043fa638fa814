"""
Selector Store

Memoizes selector traversals over content-addressed graphs so a repeated
traversal of the same root with the same selector can be replayed from a
compact record log.
"""

__version__ = "0.1.0"
