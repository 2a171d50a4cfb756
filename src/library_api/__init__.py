"""Library API.

Serverless CRUD service for book records with pluggable storage backends.
"""

__version__ = "0.1.0"
