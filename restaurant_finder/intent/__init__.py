"""
Search intent.

Responsibilities:
- Define the typed intent a language model extracts from a free-text query.
- Keep "open now" and "open at time" as one variant so both cannot be set.
- Map an intent to the query-string parameters of the places search API.
"""
