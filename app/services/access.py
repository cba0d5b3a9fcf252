"""Access control for candidate data.

The scheduling layer never reads the login session directly; it asks an
access policy stored on the app (``app.extensions["access_policy"]``).
Tests or deployments can install a different policy with
``install_access_policy``.
"""
from flask import current_app

from ..errors import AuthorizationError
from ..models.candidate import Candidate
from ..models.user import User


class OwnerAccessPolicy:
    """Staff may only touch candidates they registered themselves."""

    def can_access(self, candidate_id, caller_email):
        if not caller_email:
            return False
        user = User.query.filter_by(email=caller_email).first()
        if user is None:
            return False
        return Candidate.query.filter_by(id=candidate_id, user_id=user.id).first() is not None


def install_access_policy(app, policy):
    app.extensions["access_policy"] = policy


def get_access_policy():
    return current_app.extensions["access_policy"]


def ensure_access(candidate_id, caller_email):
    if not get_access_policy().can_access(candidate_id, caller_email):
        raise AuthorizationError()
