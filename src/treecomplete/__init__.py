"""treecomplete — lazy catalog-driven tab completion for large multi-level CLIs."""

__version__ = "0.1.0"
