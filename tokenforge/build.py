#!/usr/bin/env python3
"""Build orchestration.

This module drives one build run:
- Load the token document once
- Resolve aliases once, shared by every platform
- Per platform: transform copies, route to files, render, write
- Per-platform failure isolation with a final report

A platform either writes all of its artifacts or none of them: files are
rendered in memory and written only after every file rendered.

Example:
    >>> builder = TokenBuilder(BuildConfig.from_manager(ConfigManager()))
    >>> report = builder.build()
    >>> report.success
    True
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from tokenforge.config import BuildConfig, PlatformConfig
from tokenforge.core.errors import FormatError, TokenError, TokenWarning
from tokenforge.formats.base import FormatContext
from tokenforge.infrastructure.logger import Logger, get_logger
from tokenforge.resolve.resolver import AliasResolver
from tokenforge.rules.engine import FileRouter
from tokenforge.tokens.loader import TokenTreeLoader
from tokenforge.tokens.models import TokenTree
from tokenforge.transforms.pipeline import TransformPipeline


@dataclass
class Artifact:
    """A rendered output file."""

    path: Path
    text: str
    format: str
    token_count: int


@dataclass
class PlatformResult:
    """Outcome of one platform."""

    name: str
    artifacts: List[Artifact] = field(default_factory=list)
    warnings: List[TokenWarning] = field(default_factory=list)
    error: Optional[TokenError] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class BuildReport:
    """Outcome of a whole build run."""

    platforms: List[PlatformResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(result.success for result in self.platforms)

    @property
    def failed(self) -> List[PlatformResult]:
        return [result for result in self.platforms if not result.success]

    @property
    def files_written(self) -> List[Path]:
        return [a.path for result in self.platforms if result.success for a in result.artifacts]

    @property
    def warnings(self) -> List[TokenWarning]:
        return [w for result in self.platforms for w in result.warnings]


def write_artifact(path: Path, text: str) -> None:
    """Write an artifact as UTF-8 with LF line endings, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))


class TokenBuilder:
    """Runs the load, resolve, transform, route and emit stages."""

    def __init__(self, config: BuildConfig, logger: Optional[Logger] = None):
        """Initialize builder.

        Args:
            config: Build configuration (platforms and registries)
            logger: Optional logger
        """
        self.config = config
        self.logger = logger or get_logger()
        self.router = FileRouter(logger=self.logger)
        self.tree: Optional[TokenTree] = None
        self.resolver: Optional[AliasResolver] = None

    def load(self, document: Optional[Dict[str, Any]] = None) -> TokenTree:
        """Load the token tree from a parsed document or the configured source.

        Raises:
            StructuralError: If the document is malformed (fatal for the run)
        """
        loader = TokenTreeLoader(self.config.reserved_prefix, logger=self.logger)
        if document is None:
            self.logger.info("Loading tokens", source=str(self.config.source_path))
            self.tree = loader.load_file(self.config.source_path)
        else:
            self.tree = loader.load(document)
        self.resolver = AliasResolver(self.tree, logger=self.logger)
        return self.tree

    def build(self, document: Optional[Dict[str, Any]] = None, write: bool = True) -> BuildReport:
        """Run a complete build.

        Args:
            document: Parsed document (default: read the configured source)
            write: Write artifacts to disk

        Returns:
            BuildReport with one result per platform

        Raises:
            StructuralError: If the document is malformed
        """
        self.load(document)
        report = BuildReport()

        for platform in self.config.platforms.values():
            with self.logger.add_context(platform=platform.name):
                result = self.build_platform(platform, write=write)
            report.platforms.append(result)

        self.logger.info(
            "Build finished",
            platforms=len(report.platforms),
            failed=len(report.failed),
            files=len(report.files_written),
            warnings=len(report.warnings),
        )
        return report

    def build_platform(self, platform: PlatformConfig, write: bool = True) -> PlatformResult:
        """Build one platform; errors are captured in the result."""
        result = PlatformResult(name=platform.name)
        try:
            result.artifacts = self.render_platform(platform, result.warnings)
            if write:
                for artifact in result.artifacts:
                    write_artifact(artifact.path, artifact.text)
                    self.logger.info("Wrote artifact", path=str(artifact.path), tokens=artifact.token_count)
        except TokenError as e:
            result.error = e
            self.logger.error(f"Platform failed: {e.message}", error_code=e.error_code.name)
        except OSError as e:
            result.error = TokenError(f"Cannot write artifact: {e}")
            self.logger.error(f"Platform failed: {result.error.message}")
        return result

    def render_platform(
        self, platform: PlatformConfig, warnings: Optional[List[TokenWarning]] = None
    ) -> List[Artifact]:
        """Render every file of a platform in memory.

        Args:
            platform: Platform to render
            warnings: List collecting non-fatal warnings

        Returns:
            Rendered artifacts, in file order

        Raises:
            ResolutionError: If a token cannot be resolved
            TransformError: If a transform misbehaves
            FormatError: If an emitter fails or cannot serialize a value
        """
        if self.tree is None or self.resolver is None:
            self.load()
        warnings = warnings if warnings is not None else []

        self.resolver.resolve_all()

        pipeline = TransformPipeline.from_group(
            self.config.transforms,
            platform.transform_group,
            options=platform.transform_options,
            logger=self.logger,
        )
        transformed = pipeline.apply(self.tree.tokens)
        warnings.extend(transformed.warnings)
        dictionary = transformed.by_path()

        artifacts = []
        for file_config in platform.files:
            selected = self.router.route(transformed.tokens, file_config.filter)
            context = FormatContext(
                platform=platform.name,
                destination=file_config.destination,
                options=file_config.options,
                dictionary=dictionary,
                logger=self.logger,
            )
            formatter = self.config.formats.get(file_config.format)
            try:
                text = formatter(selected, context)
            except (TypeError, ValueError) as e:
                raise FormatError(
                    f"Cannot render {file_config.destination}: {e}", file_config.format
                )
            warnings.extend(context.warnings)
            artifacts.append(
                Artifact(
                    path=platform.output_path(file_config, self.config.base_dir),
                    text=text,
                    format=file_config.format,
                    token_count=len(selected),
                )
            )
        return artifacts
