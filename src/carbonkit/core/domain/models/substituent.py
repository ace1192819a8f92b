"""Substituent kinds that can be attached to a carbon."""

from enum import Enum


class SubstituentKind(Enum):
    """Enumeration of attachable substituents."""

    HYDROXYL = "hydroxyl"
    CARBONYL = "carbonyl"
    AMINO = "amino"
    NITRO = "nitro"
    HALOGEN = "halogen"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    SubstituentKind.HYDROXYL: "-OH",
    SubstituentKind.CARBONYL: "=O",
    SubstituentKind.AMINO: "-NH₂",
    SubstituentKind.NITRO: "-NO₂",
    SubstituentKind.HALOGEN: "-X",
}
