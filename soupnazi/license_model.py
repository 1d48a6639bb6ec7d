"""
Soupnazi Licensing - License Model

A license entry is an opaque token string. The store does not look inside
it; it only enforces what the file format needs:

- non-empty
- no line terminators (one entry = one line)

Whether a token is a well-formed credential is decided by the token
validator handed to the store, not here.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, field_validator


class LicenseEntry(BaseModel):
    """
    Immutable license entry.

    Attributes:
        token: The raw license token, exactly as stored on its line
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    token: str

    @field_validator("token")
    @classmethod
    def _check_line_safe(cls, value: str) -> str:
        if not value:
            raise ValueError("token cannot be empty")
        if "\n" in value or "\r" in value:
            raise ValueError("token cannot contain line breaks")
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("token is not valid UTF-8 text")
        return value

    def to_line(self) -> str:
        """Serialize entry to its on-disk line, terminator included."""
        return f"{self.token}\n"

    def __str__(self) -> str:
        return self.token


class LicenseListing(BaseModel):
    """
    Snapshot of a license file's contents.

    Used for machine-readable output; the store itself works with plain
    token strings.
    """

    model_config = ConfigDict(extra="forbid")

    path: str
    count: int
    licenses: List[str]

    @classmethod
    def create(cls, path: str, licenses: List[str]) -> "LicenseListing":
        return cls(path=path, count=len(licenses), licenses=list(licenses))
