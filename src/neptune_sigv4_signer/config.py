#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import configparser
import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, ClassVar, Final, Literal

from ._io import DEFAULT_MAX_BODY_SIZE
from .credentials_resolvers.chain import CredentialsResolverChain
from .identity import CredentialsResolver

logger: Final = logging.getLogger(__name__)

SOURCE_CONSTRUCTOR = "constructor"
SOURCE_ENVIRONMENT = "environment"
SOURCE_CONFIG_FILE = "config_file"
SOURCE_DEFAULT = "default"
SOURCE_IN_CODE_UPDATE = "in_code_update"

SourceType = Literal[
    "constructor",
    "environment",
    "config_file",
    "default",
    "in_code_update",
]

type ValuesLoader = Callable[[], Mapping[str, Any]]


class ConfigValue:
    """Configuration value with metadata about its source"""

    def __init__(self, value: Any, source: SourceType):
        self.value = value
        self.source = source


class SignerConfig:
    """
    Signer configuration with precedence-based resolution.

    Each value is taken from the first source that provides it: constructor
    arguments, then environment variables, then the active profile of the shared
    config file, then the default. The source of every resolved value is kept and
    can be inspected with :py:meth:`get_config_value_object`.

    Constructor parameters use the sentinel value (...) so that "not provided" can
    be told apart from "explicitly set to None".
    """

    CONFIG_FIELDS: ClassVar[dict[str, dict[str, Any]]] = {
        "region": {
            "env_var": "AWS_REGION",
            "fallback_env_var": "AWS_DEFAULT_REGION",
            "config_key": "region",
            "default": None,
            "type": str | None,
        },
        "max_body_size": {
            "env_var": "NEPTUNE_SIGV4_MAX_BODY_SIZE",
            "config_key": "neptune_sigv4_max_body_size",
            "default": DEFAULT_MAX_BODY_SIZE,
            "validator": "_validate_max_body_size",
        },
        "credentials_resolver": {
            "default": None,
            "type": CredentialsResolver | None,
        },
    }

    def __init__(
        self,
        *,
        region: str | None = ...,  # type: ignore[assignment]
        max_body_size: int = ...,  # type: ignore[assignment]
        credentials_resolver: CredentialsResolver | None = ...,  # type: ignore[assignment]
    ):
        self._constructor_values = {
            k: v for k, v in locals().items() if k != "self" and v is not ...
        }
        self._resolved = False

    def resolve(
        self,
        *,
        environment_loader: ValuesLoader | None = None,
        config_file_loader: ValuesLoader | None = None,
    ) -> None:
        """Resolve configuration from all sources.

        :param environment_loader: Returns environment values. Defaults to
            ``os.environ``.
        :param config_file_loader: Returns the active profile of the shared config
            file. Defaults to reading ``~/.aws/config``.
        :raises RuntimeError: If the config has already been resolved.
        """
        if self._resolved:
            raise RuntimeError(
                "Config has already been resolved. Multiple calls to resolve() are "
                "not allowed."
            )

        env_values = (environment_loader or self._load_environment_values)()
        config_file_values = (config_file_loader or self._load_config_file_values)()

        for field_name, field_info in self.CONFIG_FIELDS.items():
            resolved_value = self._resolve_field(
                field_name,
                self._constructor_values,
                env_values,
                config_file_values,
                field_info["default"],
                field_info.get("validator"),
            )
            logger.debug(
                "Resolved config value %s from %s", field_name, resolved_value.source
            )
            setattr(self, f"_{field_name}", resolved_value)

        self._resolved = True

    def _load_environment_values(self) -> Mapping[str, str]:
        return os.environ

    def _load_config_file_values(self) -> dict[str, Any]:
        config_file = os.environ.get("AWS_CONFIG_FILE")
        config_path = (
            Path(config_file).expanduser()
            if config_file
            else Path.home() / ".aws" / "config"
        )
        if not config_path.exists():
            return {}

        parser = configparser.ConfigParser()
        parser.read(config_path)

        profile = os.environ.get("AWS_PROFILE", "default")
        section_name = f"profile {profile}" if profile != "default" else "default"

        if section_name not in parser:
            return {}

        return dict(parser[section_name])

    def _resolve_field(
        self,
        field_name: str,
        constructor_values: dict[str, Any],
        env_values: Mapping[str, Any],
        config_file_values: Mapping[str, Any],
        default_value: Any,
        validator: str | None,
    ) -> ConfigValue:
        custom_resolver = getattr(self, f"_resolve_{field_name}", None)
        if custom_resolver:
            return custom_resolver(
                constructor_values,
                env_values,
                config_file_values,
                default_value,
                validator,
            )

        field_config = self.CONFIG_FIELDS.get(field_name, {})
        env_vars = [
            name
            for name in (
                field_config.get("env_var"),
                field_config.get("fallback_env_var"),
            )
            if name
        ]
        config_key = field_config.get("config_key")
        env_var = next((name for name in env_vars if name in env_values), None)

        if field_name in constructor_values:
            value = constructor_values[field_name]
            source = SOURCE_CONSTRUCTOR
        elif env_var is not None:
            value = env_values[env_var]
            source = SOURCE_ENVIRONMENT
        elif config_key and config_key in config_file_values:
            value = config_file_values[config_key]
            source = SOURCE_CONFIG_FILE
        else:
            value = default_value
            source = SOURCE_DEFAULT

        if validator:
            value = getattr(self, validator)(value, field_name)
        else:
            expected_type = field_config["type"]

            # Skip type checking for protocol types (they can't be runtime checked)
            if self._is_protocol_type(expected_type):
                return ConfigValue(value, source)

            if not isinstance(value, expected_type):
                actual_name = type(value).__name__
                expected_name = getattr(expected_type, "__name__", str(expected_type))
                raise TypeError(
                    f"{field_name} must be {expected_name}, got {actual_name}"
                )

        return ConfigValue(value, source)

    def _is_protocol_type(self, type_hint: Any) -> bool:
        """Check if a type hint contains protocol types that can't be runtime checked"""
        if hasattr(type_hint, "__args__"):
            return any(self._is_protocol_type(arg) for arg in type_hint.__args__)
        return getattr(type_hint, "_is_protocol", False)

    def _validate_max_body_size(self, value: Any, field_name: str) -> int:
        # Environment and config file values arrive as strings.
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                raise ValueError(
                    f"{field_name} must be an integer, got {value!r}"
                ) from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{field_name} must be int, got {type(value).__name__}")
        if value <= 0:
            raise ValueError(f"{field_name} must be positive, got {value}")
        return value

    def _resolve_credentials_resolver(
        self,
        constructor_values: dict[str, Any],
        env_values: Mapping[str, Any],
        config_file_values: Mapping[str, Any],
        default_value: Any,
        validator: str | None,
    ) -> ConfigValue:
        resolver = constructor_values.get("credentials_resolver")
        if resolver is not None:
            return ConfigValue(resolver, SOURCE_CONSTRUCTOR)
        return ConfigValue(CredentialsResolverChain(), SOURCE_DEFAULT)

    def get_config_value_object(self, field_name: str) -> ConfigValue:
        """Get the raw ConfigValue object for a field"""
        if not self._resolved:
            raise RuntimeError("Config must be resolved before accessing values")
        return getattr(self, f"_{field_name}")

    def _get(self, field_name: str) -> Any:
        return self.get_config_value_object(field_name).value

    @property
    def credentials_resolver(self) -> CredentialsResolver:
        return self._get("credentials_resolver")

    @credentials_resolver.setter
    def credentials_resolver(self, value: CredentialsResolver) -> None:
        self._credentials_resolver = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def max_body_size(self) -> int:
        return self._get("max_body_size")

    @max_body_size.setter
    def max_body_size(self, value: int) -> None:
        self._max_body_size = ConfigValue(
            self._validate_max_body_size(value, "max_body_size"),
            SOURCE_IN_CODE_UPDATE,
        )

    @property
    def region(self) -> str | None:
        return self._get("region")

    @region.setter
    def region(self, value: str | None) -> None:
        self._region = ConfigValue(value, SOURCE_IN_CODE_UPDATE)
