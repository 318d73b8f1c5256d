"""Percentage annotation package.

This package contains the modules that turn two sets of percentage values
into annotated PNG images: fixed layouts and text styles, the Pillow
rendering pass, the download of the typeface and background images, and
the request-scoped registration of the downloaded typeface. The FastAPI
application that wires them together lives in ``main.py``.
"""

__version__ = "0.1.0"
