"""User identity model."""

from pydantic import BaseModel, Field


class User(BaseModel):
    """Signed-in user as seen by the journal."""

    uid: str = Field(..., min_length=1, description="Stable user identifier")
    email: str = Field(..., min_length=3, description="Account email")
    display_name: str = Field(default="", description="Name shown in the UI")

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return self.display_name or self.email
