"""Read, edit, assemble and render DjVu documents at the chunk level."""

__version__ = "0.0.1"