"""
Small helpers: token estimates and image encoding.
"""

from .images import (
    ImageError,
    base64_to_data,
    data_to_base64,
    data_url,
    fetch_image,
    inline_image,
    url_to_base64,
)
from .tokenizer import GPT3, GPT4, MISTRAL, ModelProfile, estimate_token_count, truncate_to_token_limit

__all__ = [
    "GPT3",
    "GPT4",
    "ImageError",
    "MISTRAL",
    "ModelProfile",
    "base64_to_data",
    "data_to_base64",
    "data_url",
    "estimate_token_count",
    "fetch_image",
    "inline_image",
    "truncate_to_token_limit",
    "url_to_base64",
]
