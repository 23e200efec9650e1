from pydantic import BaseModel, ConfigDict, Field


class CustomerIn(BaseModel):
    name: str
    email: str = Field(min_length=1)


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class CertificateIn(BaseModel):
    email: str
    private_key: str = Field(alias="key")
    body: str
    active: bool = False


class CertificateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    private_key: str = Field(serialization_alias="key")
    body: str
    active: bool


class ActiveUpdate(BaseModel):
    """Body of PUT /certificate/{id}; only the active flag may change."""

    model_config = ConfigDict(extra="forbid", strict=True)

    active: bool


class Message(BaseModel):
    message: str
