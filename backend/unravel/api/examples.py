# backend/unravel/api/examples.py
from __future__ import annotations

from fastapi import APIRouter

from unravel import schemas
from unravel.config import get_settings

router = APIRouter(prefix="/example", tags=["example"])


@router.get("", response_model=schemas.ExampleRead)
def get_example() -> schemas.ExampleRead:
    """
    Return the starter program the playground shows on load and on reset.
    """
    return schemas.ExampleRead(source=get_settings().example_source)
