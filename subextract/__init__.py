"""Core package for batch subtitle extraction.

This package provides typed, testable modules that the CLI script imports.
"""
