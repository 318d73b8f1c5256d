"""Runtime configuration read from environment variables.

Environment variables:
    FONT_URL: Location of the bold typeface used for every label.
    BASE_IMAGE_ANIMALS_URL: Background image for the animal profile.
    BASE_IMAGE_BRAIN_URL: Background image for the brain profile.
    FETCH_TIMEOUT: Timeout in seconds applied to each download (default 30).
    FONT_DIR: Directory for temporary typeface files (default: the system
        temporary directory).
    CORS_ORIGINS: Comma separated list of allowed origins (default '*').
    LOG_LEVEL: Root logging level (default 'info').
"""

from __future__ import annotations

import os
import tempfile
from typing import List

FONT_URL: str = os.getenv(
    "FONT_URL",
    "https://drive.google.com/uc?export=download&id=1Djbg9Gj1-PUL7qFvMMjqRuljvXYzNmeD",
)
BASE_IMAGE_ANIMALS_URL: str = os.getenv(
    "BASE_IMAGE_ANIMALS_URL", "https://i.postimg.cc/6QDYdjPb/Design-sem-nome-17.png"
)
BASE_IMAGE_BRAIN_URL: str = os.getenv(
    "BASE_IMAGE_BRAIN_URL", "https://i.postimg.cc/LXMYjwtX/Inserir-um-t-tulo-6.png"
)

FETCH_TIMEOUT: float = float(os.getenv("FETCH_TIMEOUT", "30"))
FONT_DIR: str = os.getenv("FONT_DIR", tempfile.gettempdir())

CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")
