"""Auth provider adapters."""

from greffier.infrastructure.auth.jwt_handler import (
    decode_provider_token,
    extract_subject_id,
)

__all__ = ["decode_provider_token", "extract_subject_id"]
