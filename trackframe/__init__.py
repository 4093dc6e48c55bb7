"""
Track framing package.

Turns location samples into map polylines, day markers and camera framing
for single-day and multi-day views. The public entrypoint for CLI usage is
``trackframe.cli.main``.
"""

from .cli import main  # noqa: F401
from .controller import FrameConfig, MapViewController, compute_frame  # noqa: F401
