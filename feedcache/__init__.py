"""
Feed Cache - Remote feed acquisition with a local, time-bounded cache.

Layers:
- extract: pure I/O against the remote feed API
- transformation: domain models, mappings and the cache policy
- load: persistence of the cached snapshot
- orchestration: refresh workflows and scheduling
"""

__version__ = "0.1.0"
