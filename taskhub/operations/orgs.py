import uuid

import structlog
from sqlalchemy.orm import Session

from taskhub.auth.tokens import Actor
from taskhub.errors import NotFound
from taskhub.operations.boundary import operation
from taskhub.rbac.guard import require_perm
from taskhub.repositories.orgs import OrganizationRepository
from taskhub.schemas.envelope import Result
from taskhub.schemas.orgs import OrgCreateIn, OrgEnvelope, OrgListEnvelope, OrgOut, OrgUpdateIn

logger = structlog.get_logger()

ORG_NOT_FOUND = "Organization not found"

@operation(OrgListEnvelope, "Error fetching organizations", list_data=True)
def get_organizations(db: Session, actor: Actor) -> OrgListEnvelope:
    require_perm(actor, "orgs:list")
    orgs = OrganizationRepository(db).find_many()
    return OrgListEnvelope(
        success=True,
        message="Organizations fetched successfully",
        data=[OrgOut.model_validate(o) for o in orgs],
    )

@operation(OrgEnvelope, "Error fetching organization")
def get_organization(db: Session, actor: Actor, org_id: uuid.UUID) -> OrgEnvelope:
    require_perm(actor, "orgs:read")
    org = OrganizationRepository(db).find_by_id(org_id)
    if org is None:
        raise NotFound(ORG_NOT_FOUND)
    return OrgEnvelope(success=True, message="Organization fetched successfully", data=OrgOut.model_validate(org))

@operation(OrgEnvelope, "Error creating organization")
def create_organization(db: Session, actor: Actor, payload: OrgCreateIn) -> OrgEnvelope:
    require_perm(actor, "orgs:create")
    org = OrganizationRepository(db).create(name=payload.name)
    db.commit()

    logger.info("organization_created", organization_id=str(org.id), actor_id=str(actor.user_id))
    return OrgEnvelope(success=True, message="Organization created successfully", data=OrgOut.model_validate(org))

@operation(OrgEnvelope, "Error updating organization")
def update_organization(db: Session, actor: Actor, org_id: uuid.UUID, payload: OrgUpdateIn) -> OrgEnvelope:
    require_perm(actor, "orgs:update")
    org = OrganizationRepository(db).update(org_id, {"name": payload.name})
    if org is None:
        raise NotFound(ORG_NOT_FOUND)
    db.commit()
    return OrgEnvelope(success=True, message="Organization updated successfully", data=OrgOut.model_validate(org))

# no cascade: the store refuses while users or tasks still point here
@operation(Result, "Error deleting organization")
def delete_organization(db: Session, actor: Actor, org_id: uuid.UUID) -> Result:
    require_perm(actor, "orgs:delete")
    if not OrganizationRepository(db).delete(org_id):
        raise NotFound(ORG_NOT_FOUND)
    db.commit()

    logger.info("organization_deleted", organization_id=str(org_id), actor_id=str(actor.user_id))
    return Result(success=True, message="Organization deleted successfully")
