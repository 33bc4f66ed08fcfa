from .http_client import HttpClient
from .services import AnnotationClient

__all__ = ["HttpClient", "AnnotationClient"]
