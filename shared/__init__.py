"""
jdep Shared Module
===================

Configuration, logging and console presentation used by
the jdep command-line tool.
"""

from shared.config import JdepConfig

__all__ = ["JdepConfig"]
