"""Mappers between database rows and domain models.

JSONB columns hold the nested value objects in their ``model_dump(mode="json")``
form; pydantic parses them back on the way out.
"""

from typing import Any, Dict

from enroll.domain.model import EmailAddress, Invite, LinkedIdentity, Profile
from enroll.domain.value import AccountId, InviteCode, Platform


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    return Invite(
        code=InviteCode(row["code"]),
        label=row["label"],
        created=row["created"],
        valid_till=row["valid_till"],
        remaining_uses=row["remaining_uses"],
        no_limit=row["no_limit"],
        profile=row["profile"],
        user_expiry=row.get("user_expiry"),
        used_by=tuple(row.get("used_by") or ()),
        notify=row.get("notify") or {},
        send_to=row["send_to"],
        keys=tuple(row.get("keys") or ()),
        reserved=row.get("reserved") or 0,
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = invite.model_dump(mode="json")
    return {
        **data,
        # Timestamp columns take datetimes, not ISO strings
        "created": invite.created,
        "valid_till": invite.valid_till,
        "keys": list(invite.keys),
    }


def row_to_profile(row: Dict[str, Any]) -> Profile:
    return Profile(
        name=row["name"],
        default=row["is_default"],
        from_account=row["from_account"],
        library_access=row["library_access"],
        policy=row["policy"] or {},
        configuration=row["configuration"] or {},
        display_preferences=row["display_preferences"] or {},
        companion_template=row["companion_template"] or {},
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    data = profile.model_dump()
    data["is_default"] = data.pop("default")
    return data


def row_to_linked_identity(row: Dict[str, Any]) -> LinkedIdentity:
    return LinkedIdentity(
        account_id=AccountId(row["account_id"]),
        platform=Platform(row["platform"]),
        user_id=row["user_id"],
        display_name=row["display_name"],
        channel_id=row["channel_id"],
        contact=row["contact"],
        lang=row.get("lang"),
        linked_at=row["linked_at"],
    )


def linked_identity_to_dict(identity: LinkedIdentity) -> Dict[str, Any]:
    data = identity.model_dump()
    data["platform"] = identity.platform.value
    return data


def row_to_email_address(row: Dict[str, Any]) -> EmailAddress:
    return EmailAddress(
        account_id=AccountId(row["account_id"]),
        address=row["address"],
        contact=row["contact"],
    )
