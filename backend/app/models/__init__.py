"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy.

Note: Feature models are imported lazily to avoid circular imports.
Use direct imports from features/ modules when possible.
"""

from app.models.base import Base


def _get_models() -> dict:
    """Lazy import of all feature models."""
    from app.features.users.models import User
    from app.features.activities.models import Activity
    from app.features.mileage.models import MileageSummary
    from app.features.drops.models import Drop, DropAccess
    return {
        "User": User,
        "Activity": Activity,
        "MileageSummary": MileageSummary,
        "Drop": Drop,
        "DropAccess": DropAccess,
    }


def register_models() -> None:
    """Make sure every table is present on Base.metadata."""
    _get_models()


# Expose as module-level attributes for backward compatibility
def __getattr__(name):
    models = _get_models()
    if name in models:
        return models[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "User",
    "Activity",
    "MileageSummary",
    "Drop",
    "DropAccess",
    "register_models",
]
