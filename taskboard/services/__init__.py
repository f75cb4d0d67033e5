"""Service modules."""

from taskboard.services.auth import decode_token, generate_token, user_id_from_token
from taskboard.services.board import COLUMNS, build_board, is_overdue, is_valid_move
from taskboard.services.ownership import (
    Ownership,
    OwnershipResult,
    check_task_ownership,
    ownership_error_response,
)


__all__ = [
    "generate_token",
    "decode_token",
    "user_id_from_token",
    "Ownership",
    "OwnershipResult",
    "check_task_ownership",
    "ownership_error_response",
    "COLUMNS",
    "build_board",
    "is_overdue",
    "is_valid_move",
]
