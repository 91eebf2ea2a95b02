"""
Load Layer - Cache Persistence

This layer handles persistence of the cached feed snapshot.
- Store capability and its file-backed implementations (JSON, Parquet)
- Local loader: save / load / invalidate over a store
- Store failures are forwarded unchanged
"""
