from .collectors import BasicCollector, FullCollector, StatsFn, process_stats
from .envelope import EnvelopeCodec

__all__ = ["BasicCollector", "FullCollector", "EnvelopeCodec", "StatsFn", "process_stats"]
