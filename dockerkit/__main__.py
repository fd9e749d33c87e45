"""
Entry point for running the dockerkit CLI as a module.

Usage: python -m dockerkit [command] [options]
"""

from dockerkit.cli.parser import main

if __name__ == "__main__":
    main()
