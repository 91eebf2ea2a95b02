"""
Extract Layer - Pure I/O to the Remote Feed API

This layer handles all remote feed fetching.
- No imports from the load layer
- The HTTP client owns transport concerns (retries, timeouts)
- The remote loader maps every failure onto two error kinds
"""
