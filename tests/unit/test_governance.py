"""Тесты для Governance Gate: роли и fee timelock."""

import pytest

from src.core.errors import (
    InputValidationError,
    MissingRoleError,
    NotTimelockExecutorError,
    TimelockNotReadyError,
    UnknownProposalError,
)
from src.governance import FeeTimelock, Role, RoleRegistry


@pytest.fixture
def registry():
    return RoleRegistry({Role.ADMIN: ["admin"], Role.PAUSER: ["ops"]})


@pytest.fixture
def timelock():
    return FeeTimelock(executor="timelock", delay_seconds=100)


class TestRoleRegistry:
    def test_has_role(self, registry):
        assert registry.has_role(Role.ADMIN, "admin")
        assert registry.has_role(Role.PAUSER, "ops")
        assert not registry.has_role(Role.PAUSER, "admin")

    def test_require(self, registry):
        registry.require(Role.PAUSER, "ops")
        with pytest.raises(MissingRoleError) as exc_info:
            registry.require(Role.RECOVERY, "ops")
        assert exc_info.value.context == {"role": "RECOVERY", "caller": "ops"}

    def test_grant_and_revoke_report_change(self, registry):
        assert registry.grant(Role.EMERGENCY, "guardian")
        assert not registry.grant(Role.EMERGENCY, "guardian")
        assert registry.revoke(Role.EMERGENCY, "guardian")
        assert not registry.revoke(Role.EMERGENCY, "guardian")

    def test_empty_account_rejected(self, registry):
        with pytest.raises(InputValidationError):
            registry.grant(Role.PAUSER, "")

    def test_members_is_copy(self, registry):
        registry.members(Role.ADMIN).add("mallory")
        assert not registry.has_role(Role.ADMIN, "mallory")


class TestFeeTimelock:
    def test_propose_sets_eta(self, timelock):
        proposal = timelock.propose("setter", 50, now=1_000)
        assert proposal.proposal_id == 1
        assert proposal.eta == 1_100
        assert timelock.next_id == 2

    def test_invalid_fee(self, timelock):
        with pytest.raises(InputValidationError):
            timelock.propose("setter", 0, now=0)
        with pytest.raises(InputValidationError):
            timelock.propose("setter", 1_001, now=0)

    def test_execute_before_eta(self, timelock):
        timelock.propose("setter", 50, now=1_000)
        with pytest.raises(TimelockNotReadyError) as exc_info:
            timelock.execute("timelock", 1, now=1_099)
        assert exc_info.value.context["eta"] == 1_100
        assert 1 in timelock.pending()

    def test_execute_at_eta(self, timelock):
        timelock.propose("setter", 50, now=1_000)
        proposal = timelock.execute("timelock", 1, now=1_100)
        assert proposal.new_fee_bps == 50
        assert timelock.pending() == {}

    def test_only_executor(self, timelock):
        timelock.propose("setter", 50, now=0)
        with pytest.raises(NotTimelockExecutorError):
            timelock.execute("setter", 1, now=10_000)

    def test_unknown_and_cancelled(self, timelock):
        with pytest.raises(UnknownProposalError):
            timelock.execute("timelock", 7, now=0)
        timelock.propose("setter", 50, now=0)
        timelock.cancel(1)
        with pytest.raises(UnknownProposalError):
            timelock.execute("timelock", 1, now=10_000)

    def test_ids_not_reused(self, timelock):
        timelock.propose("setter", 50, now=0)
        timelock.cancel(1)
        assert timelock.propose("setter", 60, now=0).proposal_id == 2
