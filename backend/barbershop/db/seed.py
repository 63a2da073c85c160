"""
Database seeding functions.

Fresh installs start with the shop's standard service menu and one
professional so the booking form has something to offer.
"""

from ..core.logging_config import get_logger
from .base import ClientModel, ProfessionalModel, ServiceModel

logger = get_logger(__name__)

DEFAULT_SERVICES = (
    {"name": "Corte de Cabelo", "price": 40.0, "duration_minutes": 30},
    {"name": "Barba", "price": 25.0, "duration_minutes": 20},
    {"name": "Sobrancelha", "price": 15.0, "duration_minutes": 15},
    {"name": "Corte + Barba", "price": 60.0, "duration_minutes": 50},
)

DEFAULT_PROFESSIONALS = ({"name": "Barbeiro Principal", "specialty": "Sênior"},)

DEFAULT_CLIENTS = ({"name": "João Silva", "age": 30, "phone": "11987654321"},)


def seed_default_catalog(db) -> bool:
    """
    Insert the default services, professionals and clients into an empty
    catalog.

    Idempotent: nothing is inserted when any service already exists.

    Returns:
        True when rows were inserted.
    """
    if db.query(ServiceModel).first() is not None:
        logger.info("Catalog already populated, skipping seed")
        return False

    db.add_all(ServiceModel(**data) for data in DEFAULT_SERVICES)
    if db.query(ProfessionalModel).first() is None:
        db.add_all(ProfessionalModel(**data) for data in DEFAULT_PROFESSIONALS)
    if db.query(ClientModel).first() is None:
        db.add_all(ClientModel(**data) for data in DEFAULT_CLIENTS)
    db.commit()
    logger.info(
        "Default catalog seeded",
        extra={"context": {"services": len(DEFAULT_SERVICES)}},
    )
    return True
