"""
Transformation Layer - Pure, Deterministic Functions

This layer contains the domain models and the rules applied to them.
- Pure functions (input -> output)
- No I/O operations, no clock access
- Shared by the extract and load layers
"""
