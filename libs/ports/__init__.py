from .delivery import ChannelPort, ProvisionedChannelPort
from .host import HostPort
from .log import LogAdminPort, LogProducerPort
from .metrics import CodecPort, CollectorPort
from .time import ClockPort

__all__ = [
    "HostPort",
    "CollectorPort",
    "CodecPort",
    "ChannelPort",
    "ProvisionedChannelPort",
    "LogAdminPort",
    "LogProducerPort",
    "ClockPort",
]
