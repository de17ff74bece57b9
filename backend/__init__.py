"""Backend package for the grow simulation API.

This package provides the FastAPI web server that hosts one game session,
drives its ticks in the background and saves it to disk.
"""

__version__ = "1.0.0"
