"""Top-level package for route direction assignment.

Assigns a canonical travel direction to each trip of a transit route
and, for routes whose stop patterns branch or loop, reorders each
trip's stops into the canonical sequence of its direction.

Feed loading, label cleanup and output serialization happen outside
this package; it receives well-formed Route/Trip/StopTime records and
returns direction-labelled OutputTrips.
"""
