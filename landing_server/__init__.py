"""Local development server for the landing site.

Serves the site's static assets from a single root directory and exposes a
mock payments API used by the account area during UI development.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
