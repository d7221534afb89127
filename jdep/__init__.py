"""
jdep -- Java Class File Dependency Analyzer
============================================

jdep reads compiled Java class files and writes make-style dependency
rules listing the source files each class depends on, so that build
systems can recompile exactly what a change affects.

Capabilities:
    - Big-endian class-file parsing (constant pool, members, attributes)
    - Dependency discovery through class constants and runtime-visible
      annotations
    - Nested-class folding: a class's own nested classes contribute their
      dependencies, other classes' nested classes map to their outer class
    - Package include/exclude rules, with platform packages excluded by
      default
    - ``.d`` rule generation and JSON run reports

References:
    - Oracle. (2023). The Java Virtual Machine Specification, SE 21.
      Chapter 4: The class File Format.
"""

__version__ = "1.0.0"
