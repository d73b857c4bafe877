"""realease: release branches and version tags for package.json projects."""

__version__ = "0.3.0"
