from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime

class TokenOut(BaseModel):
    token: str
    issued_at: datetime
    expires_at: datetime
    expires_in: int
    token_type: str = "Bearer"

    class Config:
        alias_generator = to_camel
        populate_by_name = True
