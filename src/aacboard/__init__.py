"""aacboard — turn real-world phrases into bounded AAC context boards."""

__version__ = "0.1.0"
