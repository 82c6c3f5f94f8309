from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    email: str
    password: str
    first_name: str
    last_name: str


class UserRead(BaseModel):
    """User as returned by the API; the password hash is never exposed."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
