"""Option values, flag sets, condition parsers and profiling request builders for an observability query client."""

__version__ = "0.1.0"