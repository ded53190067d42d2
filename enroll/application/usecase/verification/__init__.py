"""Verification use cases."""

from enroll.application.usecase.verification.check_verification import (
    CheckVerificationRequest,
    CheckVerificationResponse,
    CheckVerificationUseCase,
)
from enroll.application.usecase.verification.issue_pin import (
    IssuePINRequest,
    IssuePINResponse,
    IssuePINUseCase,
)
from enroll.application.usecase.verification.link_identity import (
    LinkIdentityRequest,
    LinkIdentityUseCase,
)
from enroll.application.usecase.verification.list_identities import (
    ListIdentitiesRequest,
    ListIdentitiesResponse,
    ListIdentitiesUseCase,
)
from enroll.application.usecase.verification.mark_verified import (
    MarkVerifiedRequest,
    MarkVerifiedResponse,
    MarkVerifiedUseCase,
)

__all__ = [
    "CheckVerificationRequest",
    "CheckVerificationResponse",
    "CheckVerificationUseCase",
    "IssuePINRequest",
    "IssuePINResponse",
    "IssuePINUseCase",
    "LinkIdentityRequest",
    "LinkIdentityUseCase",
    "ListIdentitiesRequest",
    "ListIdentitiesResponse",
    "ListIdentitiesUseCase",
    "MarkVerifiedRequest",
    "MarkVerifiedResponse",
    "MarkVerifiedUseCase",
]
