from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RegistrationViewModel:
    username: str
    password: str = field(repr=False)
