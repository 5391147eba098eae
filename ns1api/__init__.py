"""Data models for a managed DNS platform's API: metadata, filters, data feeds, IPAM, Pulsar and monitoring."""

__version__ = "0.1.0"

__all__ = [
    "data",
    "filters",
    "ipam",
    "meta",
    "monitor",
    "pulsar",
    "strcase",
]