from .document import (
    DocumentSchema,
    MountSchema,
    UnitSchema,
    UpgradeGroupSchema,
    UpgradeOptionSchema,
    WeaponSchema,
)

__all__ = [
    "DocumentSchema",
    "MountSchema",
    "UnitSchema",
    "UpgradeGroupSchema",
    "UpgradeOptionSchema",
    "WeaponSchema",
]
