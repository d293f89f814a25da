"""Node-name sanitizing for the messaging layer.

Node names may only contain ASCII letters, digits and underscores, and must
not start with a digit.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

import re

_DISALLOWED = re.compile(r"[^A-Za-z0-9_]")


def sanitize_node_name(node_name: str) -> str:
    """Return `node_name` with disallowed characters replaced by ``_``.

    A leading digit is prefixed with ``_``. Sanitizing an already valid name
    returns it unchanged.
    """
    if not node_name:
        raise ValueError("node name must not be empty")
    sanitized = _DISALLOWED.sub("_", node_name)
    if sanitized[0].isdigit():
        sanitized = "_" + sanitized
    return sanitized
