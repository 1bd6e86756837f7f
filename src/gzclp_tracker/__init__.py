"""GZCLP Tracker - progression and adaptation engine for strength training."""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("gzclp-tracker")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"
