"""Email value object"""

import re
from dataclasses import dataclass

from ..exceptions import InvalidInput

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Email:
    address: str

    def __post_init__(self):
        if not self.address or not _EMAIL_RE.match(self.address):
            raise InvalidInput("Invalid email address")

    def __str__(self) -> str:
        return self.address
