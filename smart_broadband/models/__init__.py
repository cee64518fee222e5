from smart_broadband.models.client import Client

__all__ = ["Client"]
