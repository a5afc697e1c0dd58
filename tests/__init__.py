"""Test suite for the godl project.

This package contains all tests for the godl project, organized by module:
- cli/: Tests for command line interface functionality
- core/: Tests for core functionality (versions, catalog, installation, config)
- utils/: Tests for utility functions (archive extraction)
"""
