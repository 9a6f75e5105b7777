from .event import Binding, Event, Registration
from .responder import Responder

__all__ = (
    "Binding",
    "Event",
    "Registration",
    "Responder",
)
