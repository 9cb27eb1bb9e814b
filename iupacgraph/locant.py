from dataclasses import dataclass
from typing import Optional

from .elements import Element


@dataclass(frozen=True)
class Locant:
    """
    A position on a parent structure.

    Locant()           unspecified, resolves to the first recorded position
    Locant(2)          the second backbone atom
    Locant(1, HYDROGEN) "1H", indicated hydrogen / explicit element
    """

    number: Optional[int] = None
    element: Optional[Element] = None

    @property
    def unspecified(self) -> bool:
        return self.number is None

    def __str__(self):
        if self.number is None:
            return "?"
        if self.element is None:
            return str(self.number)
        return f"{self.number}{self.element.symbol}"


UNSPECIFIED = Locant()
