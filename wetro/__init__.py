"""Client for the WetroCloud API: RAG collections, resources and AI tools."""

__version__ = "0.1.0"