from taskhub.models.org import Organization
from taskhub.repositories.base import Repository

class OrganizationRepository(Repository[Organization]):
    model = Organization
    label = "Organization"
    required_fields = ("name",)
    mutable_fields = frozenset({"name"})
