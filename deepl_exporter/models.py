from pydantic import BaseModel, ConfigDict, field_validator


class UsageSnapshot(BaseModel):
    """Character usage for the current billing period."""
    model_config = ConfigDict(strict=True)

    character_count: int = 0
    character_limit: int = 0

    @field_validator("character_count", "character_limit", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        # JSON null leaves the field at its zero value
        return 0 if value is None else value

    @property
    def usage_percent(self) -> float:
        """Percentage of the character limit used, 0 when there is no limit."""
        if self.character_limit <= 0:
            return 0.0
        return self.character_count * 100 / self.character_limit

    @property
    def remaining(self) -> int:
        return self.character_limit - self.character_count
