"""Strongly typed identifiers.

Invite codes and account ids are opaque strings issued by this service and by
the media server respectively. NewType keeps them from being mixed up.
"""

from typing import NewType

InviteCode = NewType("InviteCode", str)
AccountId = NewType("AccountId", str)
VerificationPIN = NewType("VerificationPIN", str)
