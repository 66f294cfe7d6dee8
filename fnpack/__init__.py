"""fnpack - deterministic artifact packaging for multi-function serverless services.

Wraps interchangeable dependency-management tools behind one packager
interface and turns compiled function output into deployable zip artifacts.
"""

__version__ = "0.1.0"
__author__ = "fnpack Contributors"

from fnpack.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
