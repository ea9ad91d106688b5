"""Models for the Clerk backend API (user records)."""
from pydantic import BaseModel, Field


class ClerkEmailAddress(BaseModel):
    id: str | None = None
    email_address: str


class ClerkUser(BaseModel):
    """Subset of GET /users/{user_id} that profile sync needs."""

    id: str
    email_addresses: list[ClerkEmailAddress] = Field(default_factory=list)
    primary_email_address_id: str | None = None
    username: str | None = None
    image_url: str | None = None

    @property
    def primary_email(self) -> str | None:
        """Primary email if flagged, otherwise the first one listed."""
        for address in self.email_addresses:
            if address.id and address.id == self.primary_email_address_id:
                return address.email_address
        if self.email_addresses:
            return self.email_addresses[0].email_address
        return None
