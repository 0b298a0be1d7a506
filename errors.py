class LedgerError(Exception):
    """Base class for everything the ledger rejects."""


class ValidationError(LedgerError, ValueError):
    pass


class UnknownParticipantError(LedgerError, LookupError):
    """An expense refers to a participant id that is not in the ledger."""

    def __init__(self, participant_id: str):
        super().__init__(f"Unknown participant: {participant_id}")
        self.participant_id = participant_id


class NotFoundError(LedgerError, LookupError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"No {kind} with id {record_id}")
        self.kind = kind
        self.record_id = record_id
