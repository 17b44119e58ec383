"""
Places search client.

Responsibilities:
- Call the Foursquare Places search endpoint with built query parameters.
- Follow cursor-based pagination through the ``link`` response header.
- Validate the response body into normalized restaurant records.
"""
