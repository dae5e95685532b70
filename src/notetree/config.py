from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from notetree.processing.identity import DEFAULT_TIME_FORMAT
from notetree.scanning.filters import create_valid_extensions


class Settings(BaseSettings):
    """Application configuration loaded from environment/.env."""

    input_dir: Path | None = Field(default=None)
    extensions: list[str] = Field(default_factory=list)
    encoding: str | None = Field(default=None)
    keep_cr: bool = Field(default=True)
    cr_to_space: bool = Field(default=False)
    patient_level: int = Field(default=1, ge=0)
    document_time_format: str = Field(default=DEFAULT_TIME_FORMAT)
    database_url: str = Field(default="sqlite:///data/notetree.db")
    persist_manifest: bool = Field(default=False)
    continue_on_error: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="NOTETREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@dataclass(slots=True)
class ScanConfig:
    """
    Validated options for scanning one root.

    Validation is eager: a missing root or a negative patient level fails here, before any walk.
    Extensions are normalized to dot-prefixed form, and the wildcard `*` means accept all.

    `document_time_format` defaults to `%Y%m%d%H%M`, a 24-hour clock. The 12-hour `yyyyMMddhhmm`
    layout carries no AM/PM marker, so pass `%Y%m%d%I%M` only when that exact layout is needed.
    """

    root_path: Path
    extensions: tuple[str, ...] = field(default_factory=tuple)
    patient_level: int = 1
    keep_cr: bool = True
    cr_to_space: bool = False
    encoding: str | None = None
    document_time_format: str = DEFAULT_TIME_FORMAT

    def __post_init__(self) -> None:
        self.root_path = Path(self.root_path)
        if not self.root_path.exists():
            raise FileNotFoundError(f"Scan root not found: {self.root_path}")
        self.root_path = self.root_path.resolve()
        if self.patient_level < 0:
            raise ValueError(f"Patient level must be non-negative, got {self.patient_level}")
        self.extensions = create_valid_extensions(self.extensions)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        root: Path | None = None,
        *,
        extensions: Iterable[str] | None = None,
        patient_level: int | None = None,
    ) -> "ScanConfig":
        root_path = root or settings.input_dir
        if root_path is None:
            raise ValueError("A scan root is required via argument or NOTETREE_INPUT_DIR")
        return cls(
            root_path=root_path,
            extensions=tuple(extensions) if extensions else tuple(settings.extensions),
            patient_level=patient_level if patient_level is not None else settings.patient_level,
            keep_cr=settings.keep_cr,
            cr_to_space=settings.cr_to_space,
            encoding=settings.encoding,
            document_time_format=settings.document_time_format,
        )
