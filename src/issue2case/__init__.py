"""
issue2case - Bridge GitHub Issues and AWS Support cases.

Architecture:
- core/: Domain entities, events, ports and exceptions
- adapters/: Support gateways, GitHub, parsers, state, AI providers, config
- application/: Commands and the case monitor
- cli/: Command line interface
"""

__version__ = "1.0.0"
