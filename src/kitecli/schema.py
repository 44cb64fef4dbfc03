"""Schemas for the files kitecli reads from and writes to a project."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "CliConfigFile",
    "CompilerOptions",
    "KindSettings",
    "PackageManifest",
    "TsConfig",
]


class KindSettings(BaseModel):
    """Folder and template used when generating one kind of module."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    folder: str = Field(..., description="Folder, relative to the project directory, receiving new modules.")
    template: str = Field(default="", description="Template text; blank selects the built-in template.")
    file_suffix: str | None = Field(
        default=None,
        alias="fileSuffix",
        description="Suffix inserted before the extension, e.g. '.controller'. Omitted selects the kind default.",
    )


class CliConfigFile(BaseModel):
    """Contents of ``kite-cli.config.json``."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    cli_version: str = Field(..., alias="cliVersion", description="Version of kitecli that wrote the file.")
    controller: KindSettings
    model: KindSettings
    service: KindSettings


class CompilerOptions(BaseModel):
    """The subset of TypeScript compiler options kitecli cares about.

    Unknown options are preserved so a round trip through this model never
    drops user settings.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    root_dir: str = Field(default="./", alias="rootDir")
    out_dir: str = Field(default="./dist", alias="outDir")
    source_map: bool = Field(default=True, alias="sourceMap")


class TsConfig(BaseModel):
    """Contents of ``tsconfig.json``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    compiler_options: CompilerOptions = Field(default_factory=CompilerOptions, alias="compilerOptions")


class PackageManifest(BaseModel):
    """The parts of ``package.json`` consulted during initialization."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    dependencies: Dict[str, Any] = Field(default_factory=dict)

    def depends_on(self, package: str) -> bool:
        return package in self.dependencies
