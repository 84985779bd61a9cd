from interviewiq.models.auth_token import AuthToken
from interviewiq.models.interview import Difficulty, InterviewSession
from interviewiq.models.user import User

__all__ = ["AuthToken", "Difficulty", "InterviewSession", "User"]
