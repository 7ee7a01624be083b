"""Search a SQLite catalogue of public SBOMs and fetch the documents it lists."""

__version__ = "0.1.0"