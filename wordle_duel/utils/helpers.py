"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional


def get_connection_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract connection identity from an HTTP or Socket.IO request."""
    if request_obj is None:
        return {'sid': None, 'user_ip': 'system'}

    return {
        'sid': getattr(request_obj, 'sid', None),
        'user_ip': getattr(request_obj, 'remote_addr', None) or 'unknown'
    }
