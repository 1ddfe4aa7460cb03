"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here and ``aacboard.toml`` only
holds overrides.  An empty file (or none at all) is a valid config.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class InterpretConfig(BaseModel):
    """[interpret] section."""

    model_config = {"frozen": True}

    confidence_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    max_board_size: int = Field(default=12, ge=1)
    board_name_prefix: str = "Context: "
    board_name_max_chars: int = Field(default=30, ge=1)
    external_enabled: bool = True
    fallback_enabled: bool = True


class ExternalConfig(BaseModel):
    """[external] section — the external language model."""

    model_config = {"frozen": True}

    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    api_key: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0)
    temperature: float = 0.1
    top_k: int = 1
    top_p: float = 0.8
    max_output_tokens: int = 2000

    def generation_config(self) -> dict[str, float | int]:
        """Sampling parameters in the API's camelCase shape."""
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


class VocabularyConfig(BaseModel):
    """[vocabulary] section."""

    model_config = {"frozen": True}

    path: str | None = None
    use_starter_cards: bool = True

