"""
Command Line Interface Package

Command Structure:
- reconciliator: Main entry point with utility commands (version, config)
- reconciliator reconcile: Replay and correct the configured accounts
"""
