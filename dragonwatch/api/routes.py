from dataclasses import asdict
import logging

from fastapi import APIRouter, Depends, HTTPException, Header, Query
from sqlmodel import Session
from dragonwatch.db.base import get_session
from dragonwatch.db.crud import list_rules, save_rule, delete_rule
from dragonwatch.api.schemas import BlockIn, BlockOut, RuleIn, RuleOut, DragonsOut, RoadsOut, SyncOut
from dragonwatch.services import ingest_outcome, get_dragons, get_roads, sync_blocks, make_client
from dragonwatch.config import settings
from dragonwatch.core.models import Axis, IntervalRule
from dragonwatch.core.validation import is_valid_block_hash
from dragonwatch.tron.client import TronClient, TronError

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth(api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and api_key_header != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")

def get_client() -> TronClient:
    return make_client()

@router.get('/dragons', response_model=DragonsOut)
async def dragons(session: Session = Depends(get_session)):
    return get_dragons(session)

@router.get('/roads/{rule_id}', response_model=RoadsOut)
async def roads(rule_id: str, axis: Axis = Axis.PARITY, session: Session = Depends(get_session)):
    try:
        return get_roads(session, rule_id, axis)
    except LookupError as e:
        raise HTTPException(404, detail=str(e))

@router.get('/rules', response_model=list[RuleOut])
async def rules(session: Session = Depends(get_session)):
    return [asdict(r) for r in list_rules(session)]

@router.put('/rules/{rule_id}', response_model=RuleOut)
async def put_rule(rule_id: str, data: RuleIn, session: Session = Depends(get_session), ok=Depends(_auth)):
    rule = save_rule(session, IntervalRule(id=rule_id, **data.model_dump()))
    return asdict(rule)

@router.delete('/rules/{rule_id}')
async def remove_rule(rule_id: str, session: Session = Depends(get_session), ok=Depends(_auth)):
    if not delete_rule(session, rule_id):
        raise HTTPException(404, detail=f"unknown rule {rule_id}")
    return {'deleted': rule_id}

@router.post('/blocks', response_model=BlockOut)
async def ingest(data: BlockIn, session: Session = Depends(get_session), ok=Depends(_auth)):
    if not is_valid_block_hash(data.hash):
        raise HTTPException(400, detail="hash must be 64 hex")
    return asdict(ingest_outcome(session, data.height, data.hash, data.timestamp))

@router.post('/sync', response_model=SyncOut)
def sync(count: int | None = Query(default=None, ge=1), session: Session = Depends(get_session),
         client: TronClient = Depends(get_client), ok=Depends(_auth)):
    try:
        added = sync_blocks(session, client, count)
    except TronError as e:
        logger.error("sync failed: %s", e)
        raise HTTPException(502, detail=str(e))
    return {'added': added}
