"""Configuration model and loaders for plainyaml.

Responsibilities:
- Define codec and runtime options as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.
- Resolve options with deterministic precedence: config file > env > defaults.

Key types:
- `PlainYamlConfig`: normalized codec/runtime settings.
- `ConfigLoader`: static construction helpers for `PlainYamlConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Any, Mapping

from .decoder import DEFAULT_MAX_DEPTH, Decoder
from .encoder import DEFAULT_INDENT_STEP, Encoder
from .parsing import (
    normalize_optional_string,
    parse_positive_int,
    parse_required_boolean,
)


@dataclass(frozen=True, slots=True)
class PlainYamlConfig:
    """Codec and runtime configuration.

    Attributes:
        indent_step: Columns added per nested mapping level when encoding.
        max_depth: Maximum nesting depth accepted by the decoder.
        verbose: Whether CLI commands emit phase and debug logs.
    """

    indent_step: int = DEFAULT_INDENT_STEP
    max_depth: int = DEFAULT_MAX_DEPTH
    verbose: bool = False

    def validate(self) -> None:
        """Validate configuration values before use."""

        parse_positive_int(self.indent_step, "indent_step")
        parse_positive_int(self.max_depth, "max_depth")

    def decoder(self) -> Decoder:
        """Return a decoder configured with these options."""

        return Decoder(max_depth=self.max_depth)

    def encoder(self) -> Encoder:
        """Return an encoder configured with these options."""

        return Encoder(indent_step=self.indent_step)


class ConfigLoader:
    """Factory methods for creating `PlainYamlConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset({"indent_step", "max_depth", "verbose"})
    _ENV_KEYS = {
        "indent_step": "PLAINYAML_INDENT_STEP",
        "max_depth": "PLAINYAML_MAX_DEPTH",
        "verbose": "PLAINYAML_VERBOSE",
    }

    @staticmethod
    def from_yaml(path: Path, base: PlainYamlConfig | None = None) -> PlainYamlConfig:
        """Create a validated config from a YAML file, layered over `base`."""

        payload = ConfigLoader._parse_yaml_payload(path.read_text(encoding="utf-8"), path)
        return ConfigLoader._build_config_from_mapping(
            payload,
            base=base or PlainYamlConfig(),
            source_label=f"YAML `{path}`",
        )

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> PlainYamlConfig:
        """Create a validated config from `PLAINYAML_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload = {
            key: env_map[env_key]
            for key, env_key in ConfigLoader._ENV_KEYS.items()
            if normalize_optional_string(env_map.get(env_key)) is not None
        }
        return ConfigLoader._build_config_from_mapping(
            payload, base=PlainYamlConfig(), source_label="environment"
        )

    @staticmethod
    def resolve(
        config_path: Path | None = None,
        env: Mapping[str, str] | None = None,
        verbose: bool | None = None,
    ) -> PlainYamlConfig:
        """Resolve effective config: explicit flag > config file > env > defaults."""

        config = ConfigLoader.from_env(env)
        if config_path is not None:
            config = ConfigLoader.from_yaml(config_path, base=config)
        if verbose is not None:
            config = replace(config, verbose=verbose)
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        payload = Decoder().parse(raw_text)
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], base: PlainYamlConfig, source_label: str
    ) -> PlainYamlConfig:
        """Build a validated config from a mapping payload layered over `base`."""

        unsupported = sorted(set(payload) - ConfigLoader._SUPPORTED_YAML_KEYS)
        if unsupported:
            raise ValueError(
                f"{source_label} has unsupported key(s): {', '.join(unsupported)}."
            )

        config = base
        if payload.get("indent_step") is not None:
            config = replace(
                config, indent_step=parse_positive_int(payload["indent_step"], "indent_step")
            )
        if payload.get("max_depth") is not None:
            config = replace(
                config, max_depth=parse_positive_int(payload["max_depth"], "max_depth")
            )
        if payload.get("verbose") is not None:
            config = replace(
                config, verbose=parse_required_boolean(payload["verbose"], "verbose")
            )
        config.validate()
        return config
