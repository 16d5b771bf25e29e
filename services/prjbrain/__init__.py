"""
Prjbrain - dashboard backend for product development folders.

Reads the project number log, scans the project tree and classifies every
file against the documents listed in the log.
"""

__version__ = "0.3.0"
