from .clock import SystemClockPort
from .fakes import FixedClockPort

__all__ = ["SystemClockPort", "FixedClockPort"]
