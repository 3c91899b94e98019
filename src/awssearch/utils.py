"""Utility functions for AWS Search Tool."""

import sys
from datetime import timezone
from email.utils import format_datetime

import boto3


class DebugContext:
    """Context manager for debug output"""

    def __init__(self, enabled=False):
        """Initialize debug context with optional enabled state."""
        self.enabled = enabled

    def print(self, *args, **kwargs):
        """Print debug messages with [DEBUG] prefix and timestamp when enabled"""
        if self.enabled:
            import datetime

            timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            debug_prefix = f"[DEBUG] {timestamp}"

            if args:
                first_arg = f"{debug_prefix} {args[0]}"
                remaining_args = args[1:]
                print(first_arg, *remaining_args, file=sys.stderr, **kwargs)
            else:
                print(debug_prefix, file=sys.stderr, **kwargs)

    def enable(self):
        """Enable debug output"""
        self.enabled = True

    def disable(self):
        """Disable debug output"""
        self.enabled = False


# Global debug context
_debug_context = DebugContext()


def debug_print(*args, **kwargs):
    """Print debug messages with [DEBUG] prefix and timestamp when debug mode is enabled"""
    _debug_context.print(*args, **kwargs)


def set_debug_enabled(value):
    """Set debug mode on or off"""
    if value:
        _debug_context.enable()
    else:
        _debug_context.disable()


def get_debug_enabled():
    """Get current debug mode state"""
    return _debug_context.enabled


def split_csv(value):
    """Split a comma separated flag value without trimming the parts.

    Returns an empty list for ``None`` or an empty string.
    """
    if not value:
        return []
    return value.split(",")


def format_timestamp(value):
    """Render an API timestamp as an HTTP date, or "" when absent"""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if value.tzinfo is None:
        return format_datetime(value)
    # botocore hands back dateutil's tzutc, format_datetime only accepts timezone.utc
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def create_session(region=None, profile=None):
    """Create boto3 session with optional region/profile"""
    debug_print(
        f"create_session called with region={repr(region)}, profile={repr(profile)}"
    )  # pragma: no mutate
    session_kwargs = {}
    if region and region.strip():
        session_kwargs["region_name"] = region
        debug_print(f"Added region_name={region} to session")  # pragma: no mutate
    if profile and profile.strip():
        session_kwargs["profile_name"] = profile
        debug_print(f"Added profile_name={profile} to session")  # pragma: no mutate
    debug_print(f"Creating session with kwargs: {session_kwargs}")  # pragma: no mutate
    return boto3.Session(**session_kwargs)


def get_client(service, session=None):
    """Get boto3 client from session or create default"""
    if session:
        return session.client(service)
    return boto3.client(service)
