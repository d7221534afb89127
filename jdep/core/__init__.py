"""
jdep Core Module
=================

Extraction algorithm, error taxonomy, data models, class-file
resolution, and the batch engine.
"""
