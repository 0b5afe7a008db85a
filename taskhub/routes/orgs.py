import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskhub.auth.deps import get_actor
from taskhub.auth.tokens import Actor
from taskhub.db import get_db
from taskhub.operations import orgs as ops
from taskhub.schemas.envelope import Result
from taskhub.schemas.orgs import OrgCreateIn, OrgEnvelope, OrgListEnvelope, OrgUpdateIn

router = APIRouter(prefix="/organizations", tags=["organizations"])

@router.get("", response_model=OrgListEnvelope)
def list_organizations(
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> OrgListEnvelope:
    return ops.get_organizations(db, actor)

@router.get("/{org_id}", response_model=OrgEnvelope)
def get_organization(
    org_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> OrgEnvelope:
    return ops.get_organization(db, actor, org_id)

@router.post("", response_model=OrgEnvelope)
def create_organization(
    payload: OrgCreateIn,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> OrgEnvelope:
    return ops.create_organization(db, actor, payload)

@router.patch("/{org_id}", response_model=OrgEnvelope)
def update_organization(
    org_id: uuid.UUID,
    payload: OrgUpdateIn,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> OrgEnvelope:
    return ops.update_organization(db, actor, org_id, payload)

@router.delete("/{org_id}", response_model=Result)
def delete_organization(
    org_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> Result:
    return ops.delete_organization(db, actor, org_id)
