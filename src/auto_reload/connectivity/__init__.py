"""
Connectivity subsystem.

Components:
- models.py: connection kinds (ConnectionKind) and event type
- monitor.py: ConnectivityMonitor adapter + psutil / static platform sources
- manual.py: controllable source for scripted runs and tests
"""
