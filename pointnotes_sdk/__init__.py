from .client import AnnotationClient
from .exceptions import SDKException, TimeoutException
from .version import SDK_VERSION

__all__ = ["AnnotationClient", "SDKException", "TimeoutException", "SDK_VERSION"]
