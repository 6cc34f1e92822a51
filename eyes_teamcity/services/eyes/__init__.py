# Eyes services - batch API integration
from .client import EyesClient
from .notifier import BatchNotifier
from .schemas import NotificationMethod, NotificationRequest

__all__ = ["BatchNotifier", "EyesClient", "NotificationMethod", "NotificationRequest"]
