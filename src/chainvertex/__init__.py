"""chainvertex — in-memory graph store with ownership and adjacency queries."""

__version__ = "0.1.0"
