"""
jdep Output
============

Rule-file writing and terminal display.
"""

from jdep.output.console import JdepConsoleOutput
from jdep.output.rules import RuleWriter

__all__ = ["JdepConsoleOutput", "RuleWriter"]
