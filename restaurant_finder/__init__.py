"""
Restaurant finder service.

Turns a free-text restaurant query into structured search parameters with a
language model and pages through Foursquare Places results.
"""
