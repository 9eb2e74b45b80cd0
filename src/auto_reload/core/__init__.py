"""
Core contracts shared by the connectivity and reload subsystems.

- ports.py: Protocols for the connectivity source, subscriptions and the manager
"""
