"""
Web trigger for scrape runs.
"""

from .api import api, authorized
from .app import create_app

__all__ = ['api', 'authorized', 'create_app']
