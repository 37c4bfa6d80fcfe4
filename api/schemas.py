"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class FoundationMoveRequest(BaseModel):
    """Request to move a card to its foundation."""

    card: str = Field(..., min_length=2, description="Card code, e.g. 'AH' or '10♠'")


class TableauMoveRequest(BaseModel):
    """Request to move a card, with everything stacked on it, to a tableau pile."""

    card: str = Field(..., min_length=2, description="Card code, e.g. 'KS'")
    index: int = Field(..., ge=0, le=6, description="Destination pile, 0-6")


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    color: str
    code: str


class CardViewResponse(BaseModel):
    """A tableau card; face-down cards are not revealed."""

    card: CardResponse | None
    face_up: bool


class GameStateResponse(BaseModel):
    """Current game state."""

    deck_size: int
    discard_size: int
    discard_top: CardResponse | None
    foundations: dict[str, CardResponse | None]
    tableau: list[list[CardViewResponse]]
    moves: int
