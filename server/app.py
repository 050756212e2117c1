"""FastAPI application -- routes for quiz competition grading."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from competition.config import Settings
from competition.db.session import init_db
from competition.question_bank import QuestionBank
from server.__version__ import __version__
from server.dependencies import get_question_bank, get_runtime, get_settings
from server.runtime import Runtime
from server.schemas import (
    CheckRequest,
    CheckResponse,
    GradingRunRequest,
    GradingRunResponse,
    LeaderboardResponse,
    QuestionSchema,
    QuestionStatsResponse,
    QuestionUpsertRequest,
    QuestionsResponse,
    RespondentResultsResponse,
)
from server.services import grading_service

logger = logging.getLogger("quizarena")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan: create ledger tables. Question bank loads lazily on first request."""
    init_db(get_settings())
    ts = datetime.utcnow().isoformat() + "Z"
    logger.info("[%s] Startup: ledger ready", ts)
    yield
    ts_end = datetime.utcnow().isoformat() + "Z"
    logger.info("[%s] Shutdown: complete", ts_end)


app = FastAPI(title="Quiz Arena", version=__version__, lifespan=lifespan)


@app.get("/health")
def health():
    return {"ok": True}


# ---- Questions ----

@app.get("/questions", response_model=QuestionsResponse)
def questions_list(bank: QuestionBank = Depends(get_question_bank)):
    return grading_service.list_questions(bank)


@app.post("/questions/reload", response_model=QuestionsResponse)
def questions_reload(runtime: Runtime = Depends(get_runtime)):
    """Drop the cached bank so edits made outside the server (e.g. the CLI) show up."""
    runtime.invalidate_bank()
    return grading_service.list_questions(runtime.get_bank())


@app.get("/questions/{question_id}", response_model=QuestionSchema)
def questions_get(question_id: str, bank: QuestionBank = Depends(get_question_bank)):
    try:
        return grading_service.get_question(bank, question_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.put("/questions/{question_id}", response_model=QuestionSchema)
def questions_put(
    question_id: str,
    body: QuestionUpsertRequest,
    bank: QuestionBank = Depends(get_question_bank),
):
    try:
        return grading_service.upsert_question(bank, question_id, body.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.delete("/questions/{question_id}")
def questions_delete(question_id: str, bank: QuestionBank = Depends(get_question_bank)):
    try:
        grading_service.delete_question(bank, question_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}


# ---- Grading ----

@app.post("/grade/check", response_model=CheckResponse)
def grade_check(body: CheckRequest, bank: QuestionBank = Depends(get_question_bank)):
    try:
        return grading_service.check_answer(bank, body.question_id, body.answer)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/grade/runs", response_model=GradingRunResponse)
def grade_runs(
    body: GradingRunRequest,
    settings: Settings = Depends(get_settings),
    runtime: Runtime = Depends(get_runtime),
):
    try:
        result = grading_service.run_grading(
            runtime.get_bank(),
            settings,
            runtime.grading_lock,
            [s.model_dump() for s in body.submissions],
        )
    except Exception:
        logger.exception("Grading run failed")
        raise HTTPException(status_code=500, detail="Grading run failed")
    if result['stats']['skipped_busy']:
        raise HTTPException(status_code=409, detail="Another grading run is in progress")
    return result


@app.get("/results/{respondent_id}", response_model=RespondentResultsResponse)
def respondent_results(respondent_id: str, settings: Settings = Depends(get_settings)):
    try:
        return grading_service.get_respondent_results(settings, respondent_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ---- Leaderboard ----

@app.get("/leaderboard", response_model=LeaderboardResponse)
def leaderboard(
    top: Optional[int] = Query(default=None, ge=1, le=1000),
    settings: Settings = Depends(get_settings),
):
    return grading_service.get_leaderboard(settings, top=top)


@app.get("/leaderboard/questions", response_model=QuestionStatsResponse)
def leaderboard_questions(settings: Settings = Depends(get_settings)):
    return grading_service.get_question_stats(settings)
