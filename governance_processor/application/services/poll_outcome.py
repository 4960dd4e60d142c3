"""Records the outcome of a poll once its challenge or proposal resolves."""

from __future__ import annotations

from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.reconciliation import ChainReconciler


class PollOutcomeRecorder:
    """Sets Poll.is_passed and marks revealed voters as winners or losers."""

    def __init__(
        self, repositories: ProcessorRepositories, reconciler: ChainReconciler
    ) -> None:
        self._repos = repositories
        self._reconciler = reconciler

    async def record(self, poll_id: int, is_passed: bool, updated_at: int) -> None:
        """Persist the outcome of a poll.

        Args:
            poll_id: Poll that decided the challenge or proposal.
            is_passed: True if the vote passed (challenge failed).
            updated_at: Event timestamp.
        """
        poll = await self._reconciler.poll(poll_id, updated_at)
        await self._repos.polls.update_poll(poll.with_result(is_passed, updated_at))

        for voter in await self._repos.user_challenge_data.list_for_poll(poll_id):
            if not voter.did_reveal:
                continue
            await self._repos.user_challenge_data.update_user_challenge_data(
                voter.with_outcome(is_passed, updated_at)
            )
