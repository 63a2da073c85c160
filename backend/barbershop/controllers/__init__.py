# Controllers package initialization
# Flask blueprints exposing the booking API

from . import (
    appointment_controller,
    catalog_controller,
    client_controller,
    finance_controller,
    settings_controller,
)

__all__ = [
    "appointment_controller",
    "catalog_controller",
    "client_controller",
    "finance_controller",
    "settings_controller",
]
