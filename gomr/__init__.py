"""gomr — manage temporary local replace directives in Go modules."""

__version__ = "0.1.0"
