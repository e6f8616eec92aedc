from dataclasses import dataclass
from typing import Optional

from .models import User


@dataclass
class AuthResponseDTO:
    success: bool
    user: Optional[User] = None
    message: Optional[str] = None
    locked: bool = False
