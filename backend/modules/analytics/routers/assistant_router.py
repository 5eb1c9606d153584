# backend/modules/analytics/routers/assistant_router.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from core.exceptions import APIError, ValidationError
from modules.catalog.services.store import DashboardStore, get_store

from ..exceptions import InvalidQueryError
from ..schemas.assistant_schemas import AssistantAnswer, AssistantQuery
from ..schemas.dashboard_schemas import Prediction
from ..services.query_responder import QueryResponder
from ..services.trend_service import TrendProjector

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analytics Assistant"])


def get_trend_projector(store: DashboardStore = Depends(get_store)) -> TrendProjector:
    return TrendProjector(store)


def get_query_responder(store: DashboardStore = Depends(get_store)) -> QueryResponder:
    return QueryResponder(store)


@router.get("/predictions", response_model=List[Prediction])
def get_predictions(projector: TrendProjector = Depends(get_trend_projector)):
    """
    Next-month revenue and order volume projections.

    Each projection is the mean of the current and two previous calendar
    months, labelled High/Medium/Low by how much those months vary.
    Returns an empty list while there are no orders.
    """
    try:
        return projector.predict()
    except Exception as e:
        logger.error(f"Error projecting trends: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate predictions",
        )


@router.post("/ai-assistant", response_model=AssistantAnswer)
def ask_assistant(
    request: AssistantQuery, responder: QueryResponder = Depends(get_query_responder)
):
    """
    Answer a business question such as "What are my top products?".

    Unrecognised questions get a help block listing what can be asked.
    """
    try:
        return AssistantAnswer(answer=responder.answer(request.query))
    except InvalidQueryError as e:
        raise ValidationError(e.message, e.error_code)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error answering assistant query: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to answer query",
        )
