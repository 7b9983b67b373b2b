"""dsakit: small in-memory data structures and a generic weighted graph.

The graph component lives in :mod:`dsakit.graph`; the simpler collaborator
structures (linked list, dynamic array, heap, disjoint set) live in
:mod:`dsakit.structures`.
"""

__version__ = "0.1.0"
