"""Domain value objects."""

from passage.domain.value.identifiers import AccountId
from passage.domain.value.types import (
    AccountState,
    Credentials,
    DisplayName,
    Email,
    FederatedIdentity,
    NamePolicy,
    PasswordResetInput,
    SignupInput,
    TokenPurpose,
)

__all__ = [
    # Identifiers
    "AccountId",
    # Types
    "AccountState",
    "Credentials",
    "DisplayName",
    "Email",
    "FederatedIdentity",
    "NamePolicy",
    "PasswordResetInput",
    "SignupInput",
    "TokenPurpose",
]
