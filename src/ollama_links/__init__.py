"""ollama-links: expose Ollama model blobs to LM Studio via symlinks."""

__version__ = "0.1.0"
