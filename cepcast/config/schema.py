"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, field_validator

from cepcast.models.forecast import ConditionSymbol


class ServicesConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://brasilapi.com.br/api"
    user_agent: str = "cepcast/0.1.0"
    timeout_seconds: float = Field(default=15.0, gt=0.0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/cepcast.db"
    key: str = Field(default="last_location", min_length=1)


class NotificationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    title: str = "Previsão do tempo para amanhã"
    webhook_url: str = ""
    drain_timeout_seconds: float = Field(default=5.0, ge=0.0)


class ConditionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    extra_codes: dict[str, ConditionSymbol] = {}

    @field_validator("extra_codes")
    @classmethod
    def _no_blank_codes(cls, v: dict[str, ConditionSymbol]) -> dict[str, ConditionSymbol]:
        blank = [code for code in v if not code.strip()]
        if blank:
            raise ValueError(f"condition codes must not be blank: {blank!r}")
        return v


class CepcastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    services: ServicesConfig = ServicesConfig()
    cache: CacheConfig = CacheConfig()
    notifications: NotificationConfig = NotificationConfig()
    conditions: ConditionConfig = ConditionConfig()
