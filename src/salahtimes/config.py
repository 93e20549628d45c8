"""Environment-driven settings for the application edge.

The app calls ``load_dotenv()`` first, so values may come from a ``.env`` file.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum

from salahtimes.methods import CalculationMethod, parameters_for
from salahtimes.models import CalculationParameters, HighLatitudeRule, Madhab, Shafaq

DEFAULT_USER_AGENT = "salah-times/0.1 (prayer times lookup)"


class ConfigError(ValueError):
    """An environment variable holds an unusable value."""


@dataclass(frozen=True)
class AppConfig:
    method: CalculationMethod = CalculationMethod.MUSLIM_WORLD_LEAGUE
    madhab: Madhab = Madhab.SHAFI
    high_latitude_rule: HighLatitudeRule | None = None
    shafaq: Shafaq = Shafaq.GENERAL
    user_agent: str = DEFAULT_USER_AGENT  # Nominatim requires an identifying agent
    http_timeout: float = 10.0

    def parameters(self) -> CalculationParameters:
        return replace(
            parameters_for(self.method, self.madhab),
            high_latitude_rule=self.high_latitude_rule,
            shafaq=self.shafaq,
        )


def _enum_value(enum_cls: type[Enum], raw: str, name: str) -> Enum:
    try:
        return enum_cls(raw.strip().lower())
    except ValueError as e:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"{name}={raw!r} is not one of: {choices}") from e


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Build an AppConfig from ``SALAHTIMES_*`` variables.

    Args:
        environ: Variable source. Defaults to ``os.environ``.

    Raises:
        ConfigError: On an unknown enum value or a non-positive timeout.
    """
    env = os.environ if environ is None else environ
    config = AppConfig()

    if raw := env.get("SALAHTIMES_METHOD"):
        config = replace(config, method=_enum_value(CalculationMethod, raw, "SALAHTIMES_METHOD"))
    if raw := env.get("SALAHTIMES_MADHAB"):
        config = replace(config, madhab=_enum_value(Madhab, raw, "SALAHTIMES_MADHAB"))
    if raw := env.get("SALAHTIMES_HIGH_LATITUDE_RULE"):
        config = replace(
            config,
            high_latitude_rule=_enum_value(HighLatitudeRule, raw, "SALAHTIMES_HIGH_LATITUDE_RULE"),
        )
    if raw := env.get("SALAHTIMES_SHAFAQ"):
        config = replace(config, shafaq=_enum_value(Shafaq, raw, "SALAHTIMES_SHAFAQ"))
    if raw := env.get("SALAHTIMES_USER_AGENT"):
        config = replace(config, user_agent=raw)
    if raw := env.get("SALAHTIMES_HTTP_TIMEOUT"):
        try:
            timeout = float(raw)
        except ValueError as e:
            raise ConfigError(f"SALAHTIMES_HTTP_TIMEOUT={raw!r} is not a number") from e
        if timeout <= 0:
            raise ConfigError(f"SALAHTIMES_HTTP_TIMEOUT must be positive, got {timeout}")
        config = replace(config, http_timeout=timeout)

    return config
