"""Tests for the invite entity and duration arithmetic."""

from datetime import timedelta

from enroll.domain.model import Invite
from enroll.domain.value import DurationOffset, InviteCode, NotifyPreference
from tests.conftest import utc


class TestDurationOffset:
    def test_month_overflow_rolls_into_next_month(self):
        assert DurationOffset(months=1).apply(utc(2025, 1, 31)) == utc(2025, 3, 3)

    def test_month_overflow_in_leap_year(self):
        assert DurationOffset(months=1).apply(utc(2024, 1, 31)) == utc(2024, 3, 2)

    def test_months_cross_year_boundary(self):
        assert DurationOffset(months=3).apply(utc(2025, 11, 15)) == utc(2026, 2, 15)

    def test_all_components(self):
        offset = DurationOffset(months=1, days=2, hours=3, minutes=4)
        assert offset.apply(utc(2025, 6, 1)) == utc(2025, 7, 3, 3, 4)

    def test_zero(self):
        assert DurationOffset().is_zero
        assert not DurationOffset(minutes=1).is_zero


class TestInvite:
    def make(self, **kwargs) -> Invite:
        defaults = {"code": InviteCode("abc"), "valid_till": utc(2025, 1, 2)}
        return Invite(**{**defaults, **kwargs})

    def test_expired_at_exact_valid_till(self):
        invite = self.make()
        assert not invite.is_expired(utc(2025, 1, 1, 23, 59))
        assert invite.is_expired(utc(2025, 1, 2))

    def test_last_use_and_exhausted(self):
        assert self.make(remaining_uses=1).is_last_use
        assert self.make(remaining_uses=0).is_exhausted
        assert not self.make(remaining_uses=0, no_limit=True).is_exhausted
        assert not self.make(remaining_uses=0, no_limit=True).is_last_use

    def test_after_use_records_usage_and_drops_key(self):
        invite = self.make(remaining_uses=3, keys=("k1", "k2"))
        now = utc(2025, 1, 1, 12)

        used = invite.after_use("alice", now, key="k1")

        assert used.remaining_uses == 2
        assert [(r.identity, r.used_at) for r in used.used_by] == [("alice", now)]
        assert used.keys == ("k2",)
        # Original untouched
        assert invite.remaining_uses == 3

    def test_after_use_unlimited_keeps_counter(self):
        invite = self.make(remaining_uses=0, no_limit=True)
        assert invite.after_use("bob", utc(2025, 1, 1)).remaining_uses == 0

    def test_subscribers(self):
        invite = self.make(
            notify={
                "a@example.com": NotifyPreference(notify_expiry=True),
                "b@example.com": NotifyPreference(notify_creation=True),
                "c@example.com": NotifyPreference(),
            }
        )
        assert invite.subscribers(expiry=True) == ["a@example.com"]
        assert invite.subscribers(creation=True) == ["b@example.com"]

    def test_valid_till_moves_with_created(self):
        created = utc(2025, 1, 1)
        invite = self.make(created=created, valid_till=created + timedelta(hours=1))
        assert invite.is_expired(created + timedelta(hours=1))

    def test_reserve_holds_back_a_use(self):
        invite = self.make(remaining_uses=1, keys=("k1",))

        held = invite.reserve("k1")

        assert held.remaining_uses == 0
        assert held.reserved == 1
        assert held.keys == ()
        assert held.is_exhausted
        assert not held.is_spent
        assert not held.can_reserve(utc(2025, 1, 1))

    def test_release_undoes_reserve(self):
        invite = self.make(remaining_uses=2, keys=("k1",))

        assert invite.reserve("k1").release("k1") == invite

    def test_settle_records_usage(self):
        now = utc(2025, 1, 1, 12)

        settled = self.make(remaining_uses=1).reserve().settle("alice", now)

        assert settled.is_spent
        assert [(r.identity, r.used_at) for r in settled.used_by] == [("alice", now)]

    def test_last_use_waits_for_reservations(self):
        invite = self.make(remaining_uses=2).reserve()

        assert invite.remaining_uses == 1
        assert not invite.is_last_use

    def test_key_must_still_be_listed(self):
        invite = self.make(keys=("k1",))

        assert invite.can_reserve(utc(2025, 1, 1), "k1")
        assert not invite.can_reserve(utc(2025, 1, 1), "k2")
        assert not invite.can_reserve(utc(2025, 1, 2), "k1")
