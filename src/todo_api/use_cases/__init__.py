"""
Todo use cases. Each module holds one operation's request, response,
repository contract and handler.
"""

from . import create, delete, retrieve, update  # noqa: F401
from .common import Envelope, Handler, Notification, UseCaseRequest  # noqa: F401
