"""In-memory linked identity repository for testing."""

from typing import Optional

from enroll.domain.model.linked_identity import LinkedIdentity
from enroll.domain.repository.linked_identity import LinkedIdentityRepository
from enroll.domain.value import VERIFICATION_ORDER, AccountId, Platform


class InMemoryLinkedIdentityRepository(LinkedIdentityRepository):
    """In-memory implementation of LinkedIdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: dict[tuple[AccountId, Platform], LinkedIdentity] = {}

    async def save(self, identity: LinkedIdentity) -> LinkedIdentity:
        self._identities[(identity.account_id, identity.platform)] = identity
        return identity

    async def find(
        self, account_id: AccountId, platform: Platform
    ) -> Optional[LinkedIdentity]:
        return self._identities.get((account_id, platform))

    async def find_by_account(self, account_id: AccountId) -> list[LinkedIdentity]:
        return [
            self._identities[(account_id, platform)]
            for platform in VERIFICATION_ORDER
            if (account_id, platform) in self._identities
        ]

    async def delete(self, account_id: AccountId, platform: Platform) -> bool:
        return self._identities.pop((account_id, platform), None) is not None
