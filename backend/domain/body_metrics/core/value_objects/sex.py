"""Sex value object - biological sex used by sex-specific formulas."""

from enum import Enum
from typing import Optional

_ALIASES = {
    "male": "male",
    "m": "male",
    "masculino": "male",
    "female": "female",
    "f": "female",
    "feminino": "female",
}


class Sex(str, Enum):
    """Biological sex selecting the coefficient set of a formula."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, raw: object) -> Optional["Sex"]:
        """Normalize free-form sex values coming from records.

        Args:
            raw: ``Sex`` instance or text such as ``"M"``, ``"female"``,
                ``"masculino"``

        Returns:
            Optional[Sex]: Parsed sex, or None if the value is not recognized

        Example:
            >>> Sex.parse("M")
            <Sex.MALE: 'male'>
            >>> Sex.parse("unknown") is None
            True
        """
        if isinstance(raw, Sex):
            return raw
        if not isinstance(raw, str):
            return None
        canonical = _ALIASES.get(raw.strip().lower())
        return cls(canonical) if canonical else None

    @property
    def is_male(self) -> bool:
        return self is Sex.MALE
