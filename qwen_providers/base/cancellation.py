"""Cooperative cancellation primitives (public API facade).

- ``CancellationToken`` signals cancellation to a call in progress; streaming
  workers check it before every line read, and abort callbacks registered
  with ``on_cancel`` interrupt blocked network reads.
"""

from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken"]
