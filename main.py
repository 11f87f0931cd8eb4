from typing import List, Optional

import structlog
from bson import ObjectId
from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

import credentials
import discovery
import exchange
import listings
from config import get_settings
from errors import (
    ExternalServiceUnavailable,
    ListingNotFound,
    NotAParticipant,
    SessionNotFound,
    ValidationError,
)
from logger import setup_logging
from schemas import (
    ConfirmationOutcome,
    ExchangeSession,
    ParticipantSide,
    SessionOutline,
    UserSummary,
)
from seed import demo_listings
from store import CredentialLedger, ListingStore, SessionStore
from tagging import TaggingClient

logger = structlog.get_logger()

settings = get_settings()
setup_logging(settings.log_service, settings.log_level, json_output=settings.log_json)

app = FastAPI(title="SkillSwap API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

listing_store = ListingStore(demo_listings() if settings.seed_demo else ())
session_store = SessionStore()
credential_ledger = CredentialLedger()
tagger = TaggingClient(settings.ai_api_url, timeout=settings.ai_timeout)

# ---------- Dependencies ----------

def get_listing_store() -> ListingStore:
    return listing_store

def get_session_store() -> SessionStore:
    return session_store

def get_credential_ledger() -> CredentialLedger:
    return credential_ledger

def get_tagger() -> TaggingClient:
    return tagger

# ---------- Utility ----------

def oid(id_str: str) -> str:
    if not ObjectId.is_valid(id_str):
        raise HTTPException(status_code=400, detail="Invalid id")
    return id_str

def session_view(session: ExchangeSession) -> dict:
    data = session.model_dump(mode="json")
    data["progress"] = exchange.progress_percentage(session)
    data["is_complete"] = exchange.is_complete(session)
    return data

# ---------- Request Models ----------

class SkillCreate(BaseModel):
    title: str = ""
    category: str = ""
    level: str = ""
    type: str = ""
    location: str = ""
    duration: str = ""
    description: str = ""
    tags: List[str] = []
    availability: Optional[str] = None
    user: UserSummary

class SessionCreate(BaseModel):
    side_a: ParticipantSide
    side_b: ParticipantSide
    outline: SessionOutline = Field(default_factory=SessionOutline)
    contract_address: Optional[str] = None
    status: str = "in-progress"

class CompletionConfirm(BaseModel):
    wallet: Optional[str] = None

# ---------- Core Endpoints ----------

@app.get("/")
def read_root():
    return {"message": "SkillSwap Backend Running"}

@app.get("/api/categories")
def list_categories():
    return listings.CATEGORIES

# Skills
@app.get("/api/skills")
def explore_skills(
    search: str = "",
    type: str = "all",
    location: str = "all",
    sort: str = "recent",
    store: ListingStore = Depends(get_listing_store),
):
    try:
        query = discovery.parse_query({"search": search, "type": type, "location": location, "sort": sort})
    except ValidationError as e:
        raise HTTPException(422, str(e))
    results = discovery.apply(store.all(), query)
    return [listing.model_dump(mode="json") for listing in results]

@app.get("/api/skills/{skill_id}")
def get_skill(skill_id: str, store: ListingStore = Depends(get_listing_store)):
    try:
        listing = store.get(oid(skill_id))
    except ListingNotFound:
        raise HTTPException(404, "Skill not found")
    return listing.model_dump(mode="json")

@app.post("/api/skills", status_code=201)
def post_skill(
    payload: SkillCreate,
    store: ListingStore = Depends(get_listing_store),
    tagging: TaggingClient = Depends(get_tagger),
):
    form = payload.model_dump()
    # Reject before spending a call on the tagging service.
    try:
        listings.require_fields(form)
    except ValidationError as e:
        raise HTTPException(422, str(e))

    # Tagging is an enhancement: the post goes through even if it fails.
    ai_tags: List[str] = []
    ai_tagging = "tagged"
    try:
        ai_tags = tagging.tag_skill(payload.title, payload.description, payload.category)
    except ExternalServiceUnavailable as e:
        logger.warning("ai tagging skipped", title=payload.title, reason=str(e))
        ai_tagging = "unavailable"

    try:
        listing = listings.create_listing(form, extra_tags=ai_tags)
    except ValidationError as e:
        raise HTTPException(422, str(e))
    store.add(listing)
    logger.info("skill posted", listing_id=listing.id, ai_tagging=ai_tagging)
    return {
        "skill": listing.model_dump(mode="json"),
        "ai_tags": ai_tags,
        "ai_tagging": ai_tagging,
    }

# Sessions
@app.post("/api/sessions", status_code=201)
def create_session(payload: SessionCreate, store: SessionStore = Depends(get_session_store)):
    try:
        session = exchange.open_session(
            payload.side_a,
            payload.side_b,
            outline=payload.outline,
            contract_address=payload.contract_address,
            status=payload.status,
        )
    except ValidationError as e:
        raise HTTPException(422, str(e))
    store.add(session)
    logger.info("session opened", session_id=session.id, status=session.status)
    return session_view(session)

@app.get("/api/sessions/{session_id}")
def get_session(session_id: str, wallet: Optional[str] = None, store: SessionStore = Depends(get_session_store)):
    try:
        s = store.get(oid(session_id))
    except SessionNotFound:
        raise HTTPException(404, "Session not found")
    view = session_view(s)
    if wallet:
        view["is_participant"] = exchange.is_participant(s, wallet)
        view["has_confirmed"] = exchange.has_confirmed(s, wallet)
    return view

@app.post("/api/sessions/{session_id}/complete")
def complete_session(
    session_id: str,
    payload: CompletionConfirm,
    background_tasks: BackgroundTasks,
    store: SessionStore = Depends(get_session_store),
    ledger: CredentialLedger = Depends(get_credential_ledger),
):
    if not payload.wallet:
        raise HTTPException(401, "Wallet required to confirm completion")
    try:
        s, outcome = store.confirm(oid(session_id), payload.wallet)
    except SessionNotFound:
        raise HTTPException(404, "Session not found")
    except NotAParticipant as e:
        raise HTTPException(403, str(e))

    # Issue reputation credentials on the completion edge only, never on retries.
    if outcome is ConfirmationOutcome.SESSION_COMPLETED:
        background_tasks.add_task(credentials.issue_for_session, s, ledger)
    return {"outcome": outcome.value, "session": session_view(s)}

@app.get("/api/credentials")
def get_credentials(wallet: str, ledger: CredentialLedger = Depends(get_credential_ledger)):
    return [c.model_dump(mode="json") for c in ledger.for_holder(wallet)]

if __name__ == "__main__":
    import uvicorn

    # log_config=None keeps uvicorn on the handler installed above.
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)
