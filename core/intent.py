# core/intent.py
from pydantic import BaseModel


class ActionRequest(BaseModel):
    """
    A passive container for one incoming request.
    This does NOT execute logic.
    This does NOT make decisions.
    """

    user_id: str
    raw_input: str

    # Canonical executor name, resolved from the requested name or simile
    action: str
