"""User-agent parsing driven by a YAML table of regular expressions, with snippet indexing."""

__version__ = "0.1.0"