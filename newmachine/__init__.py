"""newmachine: bootstrap a personal Linux environment."""

__version__ = "0.1.0"
