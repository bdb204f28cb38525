"""
Main entry point for the enforcer package.

This allows the package to be run as a module:
python -m enforcer
"""

from .cli.commands import main

if __name__ == '__main__':
    main()
