"""Client for the Google Distance Matrix API with request splitting and quota pacing."""

from .matrix import *  # noqa: F401,F403
from .matrix import __all__, __version__  # noqa: F401
