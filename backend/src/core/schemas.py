from pydantic import BaseModel
from typing import List, Literal, get_args

Difficulty = Literal["Very Easy", "Easy", "Normal", "Hard", "Very Hard"]

VALID_DIFFICULTIES = get_args(Difficulty)

# ------------------------------------------------------------
# Request models
# ------------------------------------------------------------
class QuizRequest(BaseModel):
    difficulty: Difficulty         # exact, case-sensitive
    topic: str                     # e.g. "Roman Empire"


# ------------------------------------------------------------
# Question & Response models
# ------------------------------------------------------------
class QuizQuestion(BaseModel):
    question: str
    options: List[str]
    correctAnswer: str


class ErrorResponse(BaseModel):
    error: str
