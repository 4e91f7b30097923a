"""Infrastructure ORM Models"""

from .user_model import UserModel
from .submission_model import SubmissionModel, TrackModel

__all__ = [
    'UserModel',
    'SubmissionModel',
    'TrackModel',
]
