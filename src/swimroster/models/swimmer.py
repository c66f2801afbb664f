"""Swimmer roster model."""

from enum import StrEnum

from pydantic import BaseModel, field_validator


class Gender(StrEnum):
    """Swimmer gender as entered on the roster."""

    FEMALE = "F"
    MALE = "M"
    NOT_SPECIFIED = "N/A"


class Level(StrEnum):
    """Team division a swimmer competes in."""

    VARSITY = "Varsity"
    JV = "JV"


class Swimmer(BaseModel):
    """A rostered swimmer, keyed by name."""

    name: str
    grad_year: int | None = None
    gender: Gender | None = None
    level: Level | None = None
    notes: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Swimmer name is required")
        return v

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().upper()
            if not v:
                return None
            return "N/A" if v in ("NA", "N/A") else v
        return v

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept 'varsity', 'VARSITY', 'jv' etc.; blank means unset."""
        if isinstance(v, str):
            v = v.strip().lower()
            if not v:
                return None
            return {"varsity": Level.VARSITY, "jv": Level.JV}.get(v, v)
        return v

    @field_validator("grad_year", mode="before")
    @classmethod
    def blank_grad_year(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_varsity(self) -> bool:
        return self.level == Level.VARSITY

    def __str__(self) -> str:
        return self.name
