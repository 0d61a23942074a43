"""Config — load simulation and advisor parameters from YAML files.

Tunable constants (starting balances, weather ranges, interest rate,
crop catalog, advisor model settings) live in YAML and are parsed into
typed dataclasses here.  Advisor credentials come from the environment
so they never end up in a config file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from smartfarm.crops.catalog import DEFAULT_CATALOG, CropDefinition, catalog_from_mapping
from smartfarm.world.weather import Weather

ENV_REGION = "SMARTFARM_AWS_REGION"
ENV_ACCESS_KEY_ID = "SMARTFARM_AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "SMARTFARM_AWS_SECRET_ACCESS_KEY"


@dataclass(frozen=True)
class AdvisorConfig:
    """Settings for the external advice service.

    Attributes:
        model_id: Fixed text-generation model identifier.
        anthropic_version: Protocol version tag sent in every request.
        max_tokens: Response-length cap.
        temperature: Sampling temperature.
        region: Service region.
        access_key_id: Access key, or None for the default credential chain.
        secret_access_key: Secret key, or None for the default chain.
    """

    model_id: str = "anthropic.claude-3-5-sonnet-20241022-v2:0"
    anthropic_version: str = "bedrock-2023-05-31"
    max_tokens: int = 500
    temperature: float = 0.7
    region: str = "us-west-2"
    access_key_id: str | None = field(default=None, repr=False)
    secret_access_key: str | None = field(default=None, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AdvisorConfig:
        """Build from an ``advisor:`` YAML section; missing keys keep defaults."""
        return cls(
            model_id=data.get("model_id", cls.model_id),
            anthropic_version=data.get("anthropic_version", cls.anthropic_version),
            max_tokens=int(data.get("max_tokens", cls.max_tokens)),
            temperature=float(data.get("temperature", cls.temperature)),
            region=data.get("region", cls.region),
        )

    def with_env(self, environ: Mapping[str, str] | None = None) -> AdvisorConfig:
        """Overlay region and credentials from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).
        """
        env = os.environ if environ is None else environ
        return replace(
            self,
            region=env.get(ENV_REGION) or self.region,
            access_key_id=env.get(ENV_ACCESS_KEY_ID) or self.access_key_id,
            secret_access_key=env.get(ENV_SECRET_ACCESS_KEY) or self.secret_access_key,
        )


@dataclass
class SimulationConfig:
    """Top-level game configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        grid_rows: Number of field rows.
        grid_cols: Number of field columns.
        starting_money: Money on day 1.
        starting_weather: Weather on day 1.
        starting_temperature: Temperature on day 1 (°F).
        starting_moisture: Moisture on day 1 (percent).
        interest_rate: Daily simple interest on the loan balance.
        temperature_min: Inclusive lower bound of the daily temperature roll.
        temperature_max: Exclusive upper bound of the daily temperature roll.
        heat_alert_threshold: Temperatures above this raise a heat alert.
        notification_ttl: Seconds a toast stays visible.
        crops: Crop catalog keyed by kind.
        advisor: Advice service settings.
    """

    seed: int = 42
    grid_rows: int = 6
    grid_cols: int = 6

    # Day-1 conditions
    starting_money: int = 1000
    starting_weather: Weather = Weather.SUNNY
    starting_temperature: int = 75
    starting_moisture: int = 60

    interest_rate: float = 0.01
    temperature_min: int = 55
    temperature_max: int = 95
    heat_alert_threshold: int = 90
    notification_ttl: float = 3.0

    crops: dict[str, CropDefinition] = field(
        default_factory=lambda: dict(DEFAULT_CATALOG),
    )
    advisor: AdvisorConfig = field(default_factory=AdvisorConfig)

    def __post_init__(self) -> None:
        if self.temperature_min >= self.temperature_max:
            msg = (
                "temperature_min must be below temperature_max, got "
                f"{self.temperature_min} and {self.temperature_max}"
            )
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If ``starting_weather`` is not a known weather, or
                ``temperature_min`` is not below ``temperature_max``.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        crops = data.get("crops")
        return cls(
            seed=data.get("seed", cls.seed),
            grid_rows=data.get("grid_rows", cls.grid_rows),
            grid_cols=data.get("grid_cols", cls.grid_cols),
            starting_money=data.get("starting_money", cls.starting_money),
            starting_weather=Weather(
                data.get("starting_weather", cls.starting_weather.value),
            ),
            starting_temperature=data.get(
                "starting_temperature",
                cls.starting_temperature,
            ),
            starting_moisture=data.get(
                "starting_moisture",
                cls.starting_moisture,
            ),
            interest_rate=data.get("interest_rate", cls.interest_rate),
            temperature_min=data.get("temperature_min", cls.temperature_min),
            temperature_max=data.get("temperature_max", cls.temperature_max),
            heat_alert_threshold=data.get(
                "heat_alert_threshold",
                cls.heat_alert_threshold,
            ),
            notification_ttl=data.get("notification_ttl", cls.notification_ttl),
            crops=catalog_from_mapping(crops) if crops else dict(DEFAULT_CATALOG),
            advisor=AdvisorConfig.from_mapping(data.get("advisor") or {}),
        )
