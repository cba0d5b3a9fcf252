from ..errors import NotFoundError
from ..models.candidate import Candidate


def get_candidate(candidate_id):
    c = Candidate.query.get(candidate_id) if candidate_id is not None else None
    if c is None:
        raise NotFoundError("求職者が見つかりません")
    return c


def get_candidate_by_token(token):
    c = Candidate.query.filter_by(schedule_token=token).first() if token else None
    if c is None:
        raise NotFoundError("URLが無効です", code="INVALID_TOKEN")
    return c
