"""
Reload subsystem.

Components:
- backoff.py: shared doubling interval (ReloadBackoff)
- policies.py: connectivity usability classification (first_match / any_match)
- manager.py: AutoRequestManager, the connectivity-gated retry queue
"""
