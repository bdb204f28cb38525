"""
Test package for enforcer.

This package contains:
- Unit tests for individual components
- Integration tests for the full run and the CLI
- Property-based tests using Hypothesis
"""
