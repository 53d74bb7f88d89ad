"""Tests for the staking ledger."""

from decimal import Decimal

import pytest

from valhalla.services.staking_service import StakingService


@pytest.fixture
def service(store):
    return StakingService(store)


def assert_stake_fields_consistent(item):
    assert item.is_staked == (item.staked_at is not None)


class TestStakeUnstake:
    """Test cases for stake/unstake transitions."""

    def test_stake_sets_flag_and_timestamp(
        self, service, store, clock, make_user, make_item
    ):
        """Staking marks the item and stamps the time."""
        user = make_user()
        item = make_item(owner_id=user.id)

        result = service.stake(item.id)

        assert result["success"] is True
        assert result["item"].is_staked is True
        assert result["item"].staked_at == clock.current
        assert_stake_fields_consistent(store.get_item(item.id))

    def test_stake_unknown_item(self, service):
        """Unknown items are reported, not raised."""
        assert service.stake("missing") == {"success": False, "error": "item_not_found"}

    def test_unstake_unknown_item(self, service):
        """Unknown items are reported, not raised."""
        assert service.unstake("missing")["error"] == "item_not_found"

    def test_first_stake_creates_zero_reward(
        self, service, store, make_user, make_item
    ):
        """The owner's reward record starts at zero."""
        user = make_user()
        item = make_item(owner_id=user.id)

        service.stake(item.id)

        reward = store.get_staking_reward(user.id, item.id)
        assert reward is not None
        assert reward.rewards_earned == Decimal("0")

    def test_stake_twice_keeps_single_record(
        self, service, store, clock, make_user, make_item
    ):
        """Re-staking re-stamps the item but never duplicates the reward."""
        user = make_user()
        item = make_item(owner_id=user.id)

        service.stake(item.id)
        store.update_staking_reward(user.id, item.id, rewards_earned=Decimal("12.5"))
        clock.advance(hours=2)
        result = service.stake(item.id)

        rewards = [
            r for r in store.list_staking_rewards() if r.key == (user.id, item.id)
        ]
        assert len(rewards) == 1
        assert rewards[0].rewards_earned == Decimal("12.5")
        assert result["item"].staked_at == clock.current

    def test_stake_without_owner_creates_no_reward(self, service, store, make_item):
        """Unowned items can be staked but accrue nothing."""
        item = make_item()

        result = service.stake(item.id)

        assert result["item"].is_staked is True
        assert store.list_staking_rewards() == []

    def test_unstake_clears_state_and_keeps_rewards(
        self, service, store, make_user, make_item
    ):
        """Unstaking leaves the reward record untouched."""
        user = make_user()
        item = make_item(owner_id=user.id)
        service.stake(item.id)
        store.update_staking_reward(user.id, item.id, rewards_earned=Decimal("33"))

        result = service.unstake(item.id)

        assert result["item"].is_staked is False
        assert result["item"].staked_at is None
        assert_stake_fields_consistent(result["item"])
        assert store.get_staking_reward(user.id, item.id).rewards_earned == Decimal(
            "33"
        )

    def test_unstake_already_unstaked_is_noop(self, service, make_item):
        """Unstaking twice is not an error."""
        item = make_item()

        first = service.unstake(item.id)
        second = service.unstake(item.id)

        assert first["success"] and second["success"]
        assert second["item"].is_staked is False


class TestClaimRewards:
    """Test cases for claiming staking rewards."""

    def test_demo_claim(self, service, store, demo):
        """78.0 pending on a 450.25 balance claims to 528.25."""
        user = demo["user"]

        result = service.claim_rewards(user.id)

        assert result["amount"] == Decimal("78")
        assert result["new_balance"] == Decimal("528.25")
        assert store.get_user(user.id).odin_balance == Decimal("528.25")
        reward = store.get_staking_reward(user.id, demo["staked"].id)
        assert reward.rewards_earned == Decimal("0")

    def test_second_claim_is_zero(self, service, store, demo):
        """Claiming drains the rewards; a repeat claim gets nothing."""
        user = demo["user"]

        service.claim_rewards(user.id)
        second = service.claim_rewards(user.id)

        assert second["amount"] == Decimal("0")
        assert second["new_balance"] == Decimal("528.25")

    def test_claim_bumps_last_claim_at(self, service, store, clock, demo):
        """Drained records remember when they were claimed."""
        clock.advance(hours=1)

        service.claim_rewards(demo["user"].id)

        reward = store.get_staking_reward(demo["user"].id, demo["staked"].id)
        assert reward.last_claim_at == clock.current

    def test_claim_without_staked_items(self, service, make_user):
        """No staked items means a zero claim, balance unchanged."""
        user = make_user(balance="10")

        result = service.claim_rewards(user.id)

        assert result["success"] is True
        assert result["amount"] == Decimal("0")
        assert result["new_balance"] == Decimal("10")

    def test_claim_unknown_user(self, service):
        """Unknown users get a zero result."""
        result = service.claim_rewards("missing")
        assert result["amount"] == Decimal("0")
        assert result["new_balance"] == Decimal("0")

    def test_claim_skips_unstaked_items(self, service, store, make_user, make_item):
        """Rewards of unstaked items stay pending."""
        user = make_user()
        staked = make_item(owner_id=user.id)
        parked = make_item(owner_id=user.id)
        for item in (staked, parked):
            service.stake(item.id)
            store.update_staking_reward(user.id, item.id, rewards_earned=Decimal("4.5"))
        service.unstake(parked.id)

        result = service.claim_rewards(user.id)

        assert result["amount"] == Decimal("4.5")
        assert store.get_staking_reward(user.id, parked.id).rewards_earned == Decimal(
            "4.5"
        )

    def test_claim_sums_decimals_exactly(self, service, store, make_user, make_item):
        """0.1 + 0.2 is 0.3, not 0.30000000000000004."""
        user = make_user()
        for amount in ("0.1", "0.2"):
            item = make_item(owner_id=user.id)
            service.stake(item.id)
            store.update_staking_reward(
                user.id, item.id, rewards_earned=Decimal(amount)
            )

        result = service.claim_rewards(user.id)

        assert result["amount"] == Decimal("0.3")


class TestStakedItems:
    """Test cases for the staked-items view."""

    def test_staked_items_with_rewards(self, service, demo):
        """Pending rewards and whole days since staking."""
        entries = service.get_staked_items(demo["user"].id)

        assert len(entries) == 1
        assert entries[0]["item"].id == demo["staked"].id
        assert entries[0]["earned_rewards"] == Decimal("78.0")
        assert entries[0]["days_since_staked"] == 15

    def test_days_since_staked_rounds_down(self, service, clock, make_user, make_item):
        """Partial days do not count."""
        user = make_user()
        item = make_item(owner_id=user.id)
        service.stake(item.id)
        clock.advance(days=2, hours=23)

        entries = service.get_staked_items(user.id)

        assert entries[0]["days_since_staked"] == 2
        assert entries[0]["earned_rewards"] == Decimal("0")


class TestConcurrentClaims:
    """Test cases for simultaneous reward claims by one user."""

    def test_rewards_paid_once(self, service, store, demo, run_concurrently):
        """Parallel claims pay the pending 78 exactly once."""
        user = demo["user"]

        results = run_concurrently(lambda: service.claim_rewards(user.id))

        amounts = sorted(result["amount"] for result in results)
        assert amounts[-1] == Decimal("78")
        assert sum(amounts) == Decimal("78")
        assert store.get_user(user.id).odin_balance == Decimal("528.25")
        reward = store.get_staking_reward(user.id, demo["staked"].id)
        assert reward.rewards_earned == Decimal("0")
