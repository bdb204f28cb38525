"""
Command-line interface for enforcer.
"""
