"""Message analysis, reply drafting and conversation history routes."""

from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from orientlink.db.dependencies import get_db
from orientlink.gateway import ModelGateway, get_default_model_gateway
from orientlink.models.conversation_record import MessageType
from orientlink.routers.params import UserIdQuery
from orientlink.schemas.analysis import (
    AnalyzeRequest,
    AnalyzeResponse,
    ConversationRecordRead,
    SuggestedResponses,
)
from orientlink.schemas.respond import RespondRequest
from orientlink.services.analysis import (
    analyze_message,
    list_conversations,
    list_conversations_by_type,
    list_recent_conversations,
)
from orientlink.services.responses import generate_responses

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    payload: AnalyzeRequest,
    db: Session = Depends(get_db),
    gateway: ModelGateway = Depends(get_default_model_gateway),
) -> AnalyzeResponse:
    """Translate and interpret a message, flag risks and draft three replies."""

    return analyze_message(db, payload, gateway=gateway)


@router.post("/respond", response_model=SuggestedResponses, response_model_exclude_none=True)
def respond(
    payload: RespondRequest,
    gateway: ModelGateway = Depends(get_default_model_gateway),
) -> SuggestedResponses:
    """Draft bilingual replies in the requested tone(s)."""

    return generate_responses(payload, gateway=gateway)


@router.get("/conversations", response_model=list[ConversationRecordRead])
def get_conversations(
    user_id: UserIdQuery,
    provider_id: int | None = Query(default=None, alias="providerId"),
    db: Session = Depends(get_db),
) -> list[ConversationRecordRead]:
    """List a user's conversation records, newest first."""

    records = list_conversations(db, user_id, supplier_id=provider_id)
    return [ConversationRecordRead.model_validate(record) for record in records]


@router.get("/conversations/recent", response_model=list[ConversationRecordRead])
def get_recent_conversations(
    user_id: UserIdQuery,
    days: int = Query(default=7, ge=1, le=365),
    db: Session = Depends(get_db),
) -> list[ConversationRecordRead]:
    """List a user's conversation records from the last ``days`` days."""

    since = datetime.now(timezone.utc) - timedelta(days=days)
    records = list_recent_conversations(db, user_id, since)
    return [ConversationRecordRead.model_validate(record) for record in records]


@router.get("/conversations/by-type", response_model=list[ConversationRecordRead])
def get_conversations_by_type(
    message_type: MessageType = Query(..., alias="messageType"),
    db: Session = Depends(get_db),
) -> list[ConversationRecordRead]:
    """List conversation records with one message-type tag."""

    records = list_conversations_by_type(db, message_type)
    return [ConversationRecordRead.model_validate(record) for record in records]
