from .service import TopicProvisioner

__all__ = ["TopicProvisioner"]
