"""Reading DAISY talking books: discovery, navigation files, SMIL timing and bookmarks."""

__version__ = "0.1.0"