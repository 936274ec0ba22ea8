"""m2boot — settings discovery and session bootstrap for Maven-style resolvers."""

__version__ = "0.1.0"
