"""
Fee Timelock — отложенное изменение swap fee

propose → (задержка timelock_delay_seconds) → execute
          └──────────── cancel ─────────────┘

- eta = proposed_at + timelock_delay_seconds (timestamp хостинг-леджера)
- Исполнить может только отдельная идентичность executor и только при
  now >= eta
- Исполненное или отменённое предложение удаляется; идентификаторы
  монотонны и не переиспользуются
"""

from typing import Dict

from src.core.domain.pool_state import TimelockProposal
from src.core.domain.units import validate_fee_bps
from src.core.errors import NotTimelockExecutorError, TimelockNotReadyError, UnknownProposalError


class FeeTimelock:
    def __init__(self, executor: str, delay_seconds: int) -> None:
        if not executor:
            raise ValueError("timelock executor must be non-empty")
        if delay_seconds < 0:
            raise ValueError(f"timelock delay must be non-negative, got {delay_seconds}")
        self.executor = executor
        self.delay_seconds = delay_seconds
        self.proposals: Dict[int, TimelockProposal] = {}
        self.next_id = 1

    def propose(self, proposer: str, new_fee_bps: int, now: int) -> TimelockProposal:
        """
        Регистрация предложения.

        Raises:
            InputValidationError: new_fee_bps вне [1, 1000]
        """
        validate_fee_bps(new_fee_bps)
        proposal = TimelockProposal(
            proposal_id=self.next_id,
            new_fee_bps=new_fee_bps,
            proposer=proposer,
            proposed_at=now,
            eta=now + self.delay_seconds,
        )
        self.proposals[proposal.proposal_id] = proposal
        self.next_id += 1
        return proposal

    def get(self, proposal_id: int) -> TimelockProposal:
        """
        Raises:
            UnknownProposalError: Нет ожидающего предложения с таким id
        """
        proposal = self.proposals.get(proposal_id)
        if proposal is None:
            raise UnknownProposalError("unknown fee proposal", proposal_id=proposal_id)
        return proposal

    def pending(self) -> Dict[int, TimelockProposal]:
        return dict(self.proposals)

    def cancel(self, proposal_id: int) -> TimelockProposal:
        proposal = self.get(proposal_id)
        del self.proposals[proposal_id]
        return proposal

    def execute(self, caller: str, proposal_id: int, now: int) -> TimelockProposal:
        """
        Исполнение созревшего предложения.

        Raises:
            NotTimelockExecutorError: caller не executor
            UnknownProposalError: Нет такого предложения
            TimelockNotReadyError: now < eta
        """
        self.require_executor(caller)
        proposal = self.get(proposal_id)
        if not proposal.is_mature(now):
            raise TimelockNotReadyError(
                "fee proposal not yet executable",
                proposal_id=proposal_id,
                eta=proposal.eta,
                now=now,
            )
        del self.proposals[proposal_id]
        return proposal

    def require_executor(self, caller: str) -> None:
        if caller != self.executor:
            raise NotTimelockExecutorError(
                "only the timelock executor may execute fee changes", caller=caller
            )
