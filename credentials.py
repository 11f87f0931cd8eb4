"""Reputation credential issuance, triggered once per completed session."""

from typing import List

import structlog
from bson import ObjectId

import exchange
from schemas import ExchangeSession, ReputationCredential
from store import CredentialLedger

logger = structlog.get_logger()


def issue_for_session(session: ExchangeSession, ledger: CredentialLedger) -> List[ReputationCredential]:
    """Issue one credential to each participant of a completed session.

    Runs after the confirmation response has been sent. A session that is not
    complete, or already has credentials, is skipped.
    """
    if not exchange.is_complete(session):
        logger.warning("credential issuance skipped, session open", session_id=session.id)
        return []
    if ledger.for_session(session.id):
        logger.warning("credentials already issued", session_id=session.id)
        return []

    issued = []
    for side, other in ((session.side_a, session.side_b), (session.side_b, session.side_a)):
        credential = ReputationCredential(
            id=str(ObjectId()),
            session_id=session.id,
            holder=side.owner,
            skill_title=side.skill_title,
            counterparty=other.owner,
        )
        issued.append(ledger.record(credential))
    logger.info("reputation credentials issued", session_id=session.id, count=len(issued))
    return issued
