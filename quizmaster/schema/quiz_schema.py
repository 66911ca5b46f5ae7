from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from datetime import datetime


##############
### Scoring ###
##############
class QuestionKey(BaseModel):
    question_id: int
    correct_answer: str
    points: int = 1


class ScoreResult(BaseModel):
    score: int
    correct_answers: int
    total_questions: int
    percentage: int


##################
### Submission ###
##################
class QuizSubmission(BaseModel):
    # JSON object keys arrive as strings: {"12": "b"}
    answers: Dict[str, str] = Field(default_factory=dict)
    timeTaken: Optional[int] = Field(default=None, ge=0)


class SubmissionResultOut(BaseModel):
    score: int
    totalQuestions: int
    correctAnswers: int
    percentage: int
    timeTaken: Optional[int]
    attemptId: int


###############
### History ###
###############
class AttemptOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_id: int
    quiz_title: str
    score: int
    total_questions: int
    time_taken: Optional[int]
    completed_at: datetime


class AttemptsOut(BaseModel):
    attempts: List[AttemptOut]
