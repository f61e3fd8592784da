from .broker import BrokerState, BrokerStateHost
from .fakes import FakeHostPort
from .static import StaticHostPort

__all__ = ["BrokerState", "BrokerStateHost", "StaticHostPort", "FakeHostPort"]
