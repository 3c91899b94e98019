"""
AWS Search Tool - search EC2 instances, Auto Scaling Groups and Target Groups.

This package drains the paginated AWS list APIs, filters the snapshot with a
comma separated OR query over names, ids and tags, and renders tag columns
chosen by the caller.
"""

from .cli import main
from .utils import debug_print

__version__ = "1.0.0"
__all__ = ["main", "debug_print"]
