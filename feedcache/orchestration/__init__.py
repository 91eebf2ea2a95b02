"""
Orchestration Layer - Workflow Coordination

This layer coordinates the feed workflows.
- Refresh: remote load, then replace the cache
- Load with fallback: remote first, cached items when the remote fails
- Periodic refresh scheduling
"""
