"""
Request orchestration.

Responsibilities:
- Validate an inbound request as a fresh query or a pagination continuation.
- Sequence intent resolution, parameter building and the places search.
- Report every request as a named outcome for the HTTP layer to render.
"""
