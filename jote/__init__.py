"""jote: jot down notes, versioned in git and searchable by tag."""

__version__ = "0.1.0"
