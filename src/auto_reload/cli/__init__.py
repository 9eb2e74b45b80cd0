"""
Command-line entrypoints.

- bootstrap.py: composition root (settings -> monitor -> manager)
- main.py: auto-reload-demo console script
"""
