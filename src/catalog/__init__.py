"""Product catalog HTTP/JSON service.

This package contains the catalog API: product and presentation entities,
their persistence, the image file store, and the FastAPI surface on top.
"""

__version__ = "0.1.0"
