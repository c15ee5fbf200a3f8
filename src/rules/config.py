from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from check.results import ErrorKind, Failure, Result, Success

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "truss.toml"


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class Rule(_StrictModel):
    """A source layer that must not depend on any of the disallowed layers."""

    name: str = Field(min_length=1, description="Rule identifier used by suppressions")
    from_layer: str = Field(alias="from", description="Source layer name")
    disallow: list[str] = Field(
        min_length=1,
        description="Layer names the source layer must not depend on",
    )
    message: str | None = Field(
        default=None,
        description="Custom violation reason (default is derived from the layers)",
    )


class Suppression(_StrictModel):
    """An accepted exception for one rule in one file."""

    file: str = Field(min_length=1, description="Repo-relative POSIX path")
    rule: str = Field(min_length=1, description="Name of the suppressed rule")
    reason: str = Field(min_length=1, description="Why the violation is accepted")


class TrussConfig(_StrictModel):
    """Configuration for layer classification, rules and suppressions."""

    layers: dict[str, list[str]] = Field(
        description="Layer name -> ordered path-prefix patterns (first match wins)",
    )
    rules: list[Rule] = Field(
        default_factory=list,
        description="Disallow rules, evaluated in declared order",
    )
    suppressions: list[Suppression] = Field(
        default_factory=list,
        description="Accepted violations keyed by (file, rule)",
    )
    ignore: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude from discovery",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )

    @model_validator(mode="after")
    def check_references(self) -> TrussConfig:
        """Reject layers without patterns and rules naming unknown layers/rules."""
        if not self.layers:
            msg = "at least one layer must be declared"
            raise ValueError(msg)

        for name, patterns in self.layers.items():
            if not patterns or any(not pattern for pattern in patterns):
                msg = f"layer '{name}' must declare at least one non-empty pattern"
                raise ValueError(msg)

        rule_names: set[str] = set()
        for rule in self.rules:
            if rule.name in rule_names:
                msg = f"duplicate rule name '{rule.name}'"
                raise ValueError(msg)
            rule_names.add(rule.name)

            unknown = [
                layer
                for layer in [rule.from_layer, *rule.disallow]
                if layer not in self.layers
            ]
            if unknown:
                msg = (
                    f"rule '{rule.name}' references undeclared layer(s): "
                    f"{', '.join(unknown)}"
                )
                raise ValueError(msg)

        for suppression in self.suppressions:
            if suppression.rule not in rule_names:
                msg = (
                    f"suppression for '{suppression.file}' references "
                    f"unknown rule '{suppression.rule}'"
                )
                raise ValueError(msg)

        return self


def default_config_path(root: Path) -> Path:
    return root / CONFIG_FILENAME


def load_config(config_path: Path) -> Result[TrussConfig]:
    """Load and validate a truss.toml file.

    Returns:
        ``Success`` wrapping the validated config, or a ``Failure`` tagged
        ``ErrorKind.CONFIG`` describing why the file could not be used.
    """
    if not config_path.is_file():
        return Failure(ErrorKind.CONFIG, f"Config file not found: {config_path}")

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        return Failure(ErrorKind.CONFIG, f"Invalid TOML in {config_path}: {e}")
    except OSError as e:
        return Failure(ErrorKind.CONFIG, f"Cannot read {config_path}: {e}")

    try:
        config = TrussConfig.model_validate(data)
    except ValidationError as e:
        return Failure(ErrorKind.CONFIG, f"Invalid config in {config_path}: {e}")

    logger.debug(
        "Loaded %s: %d layers, %d rules, %d suppressions",
        config_path,
        len(config.layers),
        len(config.rules),
        len(config.suppressions),
    )
    return Success(config)
