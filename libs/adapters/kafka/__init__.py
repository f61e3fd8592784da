from .fakes import InMemoryLogCluster

__all__ = ["InMemoryLogCluster"]
