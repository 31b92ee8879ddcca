# taskboard/schemas/tokens.py
from pydantic import BaseModel
from taskboard.schemas.user import UserOut

class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserOut
