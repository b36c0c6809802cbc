class PanelScoreError(Exception):
    """Base class for errors raised by the evaluation core."""


class RecordValidationError(PanelScoreError):
    """A row coming back from the database does not fit its record shape."""

    def __init__(self, kind, row_id, detail):
        self.kind = kind
        self.row_id = row_id
        self.detail = detail
        super().__init__(f"malformed {kind} row id={row_id}: {detail}")


class AlreadySubmittedError(PanelScoreError):
    """The (evaluator, candidate) pair was finalized and can no longer change."""

    def __init__(self, evaluator_id, candidate_id):
        self.evaluator_id = evaluator_id
        self.candidate_id = candidate_id
        super().__init__(f"evaluation already submitted: evaluator={evaluator_id} candidate={candidate_id}")


class ScoreOutOfRangeError(PanelScoreError):
    def __init__(self, item_id, score, max_score):
        self.item_id = item_id
        self.score = score
        self.max_score = max_score
        super().__init__(f"score {score} for item {item_id} is outside 0..{max_score}")


class ImportFormatError(PanelScoreError):
    """Uploaded spreadsheet could not be parsed."""
