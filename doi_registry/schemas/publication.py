"""Published DOI schemas."""

from pydantic import BaseModel, Field


class DoiPublicationDTO(BaseModel):
    """Published DOI response schema."""

    id: int
    doiserver_id: int = Field(..., alias="doiServerId")
    metadata_uuid: str = Field(..., alias="metadataUuid")
    doi: str
    created_at: int = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}
