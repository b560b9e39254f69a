from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """Identité authentifiée à l'origine d'une requête."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str = ""
    email: str = ""
    is_admin: bool = Field(False, alias="isAdmin")
