"""
Entry point for running the dockerkit CLI as a module.

Usage: python -m dockerkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
