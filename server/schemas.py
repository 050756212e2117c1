"""Pydantic request/response schemas for the grading API."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# ---- Questions ----

class QuestionSchema(BaseModel):
    question_id: str = Field(..., min_length=1, max_length=128)
    question_type: str = "FreeText"
    options: List[Optional[str]] = Field(default_factory=list, max_length=6)
    correct_answer: str = ""
    points: int = Field(default=1, ge=1)
    prompt: str = ""


class QuestionUpsertRequest(BaseModel):
    question_type: str = "FreeText"
    options: List[Optional[str]] = Field(default_factory=list, max_length=6)
    correct_answer: str = ""
    points: int = Field(default=1, ge=1)
    prompt: str = ""


class QuestionsResponse(BaseModel):
    count: int
    questions: List[QuestionSchema]


# ---- Single-answer check ----

class CheckRequest(BaseModel):
    question_id: str = Field(..., min_length=1)
    answer: str = Field(default="", max_length=5000)


class CheckResponse(BaseModel):
    question_id: str
    is_correct: bool
    is_partial: bool
    earned_points: int
    max_points: int
    status: str
    user_items: List[str]
    correct_items: List[str]


# ---- Grading runs ----

class SubmissionSchema(BaseModel):
    timestamp: str = Field(..., min_length=1)
    respondent_id: str = Field(..., min_length=1)
    answers: Dict[str, Optional[str]] = Field(default_factory=dict)


class GradingRunRequest(BaseModel):
    submissions: List[SubmissionSchema]


class GradingRunResponse(BaseModel):
    stats: Dict[str, Any]


# ---- Leaderboard ----

class LeaderboardRow(BaseModel):
    rank: int
    respondent_id: str
    total_points: int
    correct: int
    partial: int
    answered: int


class LeaderboardResponse(BaseModel):
    rows: List[LeaderboardRow]


class QuestionStatsRow(BaseModel):
    question_id: str
    attempts: int
    correct: int
    partial: int
    percent_correct: float
    avg_points: float


class QuestionStatsResponse(BaseModel):
    questions: List[QuestionStatsRow]


# ---- Results ----

class ResultRow(BaseModel):
    timestamp: str
    question_id: str
    answer: str
    status: str
    earned_points: int
    max_points: int
    resolved_answer: List[str]
    resolved_correct: List[str]
    graded_at: Optional[str] = None


class RespondentResultsResponse(BaseModel):
    respondent_id: str
    total_points: int
    results: List[ResultRow]
