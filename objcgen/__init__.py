"""Generate Go bindings for Objective-C frameworks from Doxygen XML."""

from __future__ import annotations

__version__ = "0.1.0"
