from .log_channel import LogChannel
from .remote_channel import RemoteChannel

__all__ = ["LogChannel", "RemoteChannel"]
