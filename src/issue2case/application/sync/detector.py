"""
Change Detector - Diff a polled case against its last snapshot.
"""

from typing import Optional

from ...core.domain.entities import Case, Snapshot
from ...core.domain.events import CaseEvent, NewCommunications, StatusChanged


class ChangeDetector:
    """
    Compares the current observation of a case with its previous snapshot.

    Status transitions are reported as observed; their legality is the
    support service's business. Communications are matched on
    ``time_created``, which is unique within a case.
    """

    def detect(self, current: Case, previous: Optional[Snapshot]) -> list[CaseEvent]:
        """
        Return the events for one case, StatusChanged first.

        A case with no observed snapshot is new to us and yields nothing;
        its creation was announced when it was created.
        """
        if previous is None or not previous.observed:
            return []

        issue_number = previous.issue_number
        events: list[CaseEvent] = []

        if current.status != previous.case.status:
            events.append(StatusChanged(
                case=current,
                issue_number=issue_number,
                previous_status=previous.case.status,
                current_status=current.status,
            ))

        new_communications = self.new_communications(current, previous.case)
        if new_communications:
            events.append(NewCommunications(
                case=current,
                issue_number=issue_number,
                communications=tuple(new_communications),
            ))

        return events

    @staticmethod
    def new_communications(current: Case, previous: Case) -> list:
        """Communications in ``current`` whose timestamp ``previous`` lacks."""
        seen = previous.communication_times()
        return [c for c in current.recent_communications if c.time_created not in seen]
