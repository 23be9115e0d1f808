"""
Authentication payloads and envelopes.
"""
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from pokecollect.models.base import optional, parse_timestamp, require_mapping, required


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "password": self.password}


@dataclass(frozen=True)
class SignupRequest:
    name: str
    email: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "email": self.email, "password": self.password}


@dataclass(frozen=True)
class ForgotPasswordRequest:
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email}


@dataclass(frozen=True)
class VerifyResetCodeRequest:
    email: str
    code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "code": self.code}


@dataclass(frozen=True)
class ResetPasswordRequest:
    email: str
    code: str
    new_password: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "code": self.code, "newPassword": self.new_password}


@dataclass(frozen=True)
class User:
    """Server-issued user profile. Never persisted locally."""
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        data = require_mapping(data)
        return cls(
            id=optional(data, "id", int),
            name=required(data, "name", str),
            email=required(data, "email", str),
            created_at=parse_timestamp(required(data, "createdAt", str)),
            updated_at=parse_timestamp(required(data, "updatedAt", str)),
        )


@dataclass(frozen=True)
class AuthResponse:
    token: str
    user: Optional[User] = None

    @classmethod
    def from_dict(cls, data: Any) -> "AuthResponse":
        data = require_mapping(data)
        user = data.get("user")
        return cls(
            token=required(data, "token", str),
            user=User.from_dict(user) if user is not None else None,
        )


@dataclass(frozen=True)
class SuccessResponse:
    message: str
    timestamp: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SuccessResponse":
        data = require_mapping(data)
        return cls(
            message=required(data, "message", str),
            timestamp=optional(data, "timestamp", int),
        )

    @classmethod
    def from_text(cls, text: str) -> "SuccessResponse":
        """
        Decode a success body that may be an envelope or a bare message.

        The password reset endpoints answer with a plain string rather than
        the ``{message, timestamp}`` envelope.
        """
        try:
            data = json.loads(text)
        except ValueError:
            return cls(message=text.strip())
        if isinstance(data, str):
            return cls(message=data)
        return cls.from_dict(data)


@dataclass(frozen=True)
class ErrorResponse:
    """Error envelope sent with non-2xx responses."""
    status: int
    error: str
    message: str
    timestamp: int
    details: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ErrorResponse":
        data = require_mapping(data)
        return cls(
            status=required(data, "status", int),
            error=required(data, "error", str),
            message=required(data, "message", str),
            timestamp=required(data, "timestamp", int),
            details=optional(data, "details", dict),
        )
