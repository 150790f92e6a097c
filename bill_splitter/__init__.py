"""
Bill Splitter - Source Package

A small single-screen tool for splitting shared bills between a group
of participants and keeping a running balance per person.

DESIGN PRINCIPLES:
1. One state owner, pure derivations
2. Malformed numbers degrade to zero, never crash
3. Warnings are advisory, never blocking
4. Only the participant list is persisted
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Bill Splitter Team"
