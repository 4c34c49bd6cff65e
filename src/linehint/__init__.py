"""Show the diagnostics of the line under the cursor after a short idle delay."""

__version__ = "0.1.0"
