"""Expose the application factory at package level.

Callers can ``from postboard import create_app`` without traversing the
package structure (e.g. ``flask --app postboard run``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
