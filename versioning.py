"""Application name and version for the animated number demo.

The demo window title and startup banner read these so the strings live in
one place; keep ``APP_VERSION`` in step with ``pyproject.toml``.
"""
from __future__ import annotations


APP_NAME: str = "AnimatedNumber"
APP_VERSION: str = "0.1.1"


__all__ = [
    "APP_NAME",
    "APP_VERSION",
]
