"""
Agents External Integrations
============================

- YAML routing table loader
- Log-only usage analytics sink
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from askrexi.agents.application import IUsageAnalytics
from askrexi.agents.domain import RoutingTable, UsageRecord
from askrexi.core import ConfigurationException
from askrexi.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class RoutingConfigManager:
    """
    Loads the routing table once at startup.

    The table is never reloaded; a missing file means the built-in defaults.
    """

    def __init__(self):
        self._table: Optional[RoutingTable] = None
        self._path: Optional[Path] = None

    def load(self, path: Union[str, Path]) -> RoutingTable:
        """Initial configuration load."""
        self._path = Path(path)
        self._table = self._load_from_file(self._path)
        return self._table

    def _load_from_file(self, path: Path) -> RoutingTable:
        """Load and validate the YAML routing file."""
        if not path.exists():
            logger.warning(f"Routing config file not found: {path}, using defaults")
            return RoutingTable()

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationException(f"Cannot read routing config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationException(f"Routing config {path} must be a mapping")

        try:
            table = RoutingTable(**data)
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid routing config {path}",
                {"errors": e.errors(include_url=False)}
            ) from e

        logger.info(
            "Routing configuration loaded",
            extra={
                "path": str(path),
                "domains": list(table.domain_names),
                "priority_rules": len(table.priority_rules),
            }
        )
        return table

    @property
    def table(self) -> RoutingTable:
        """Get the loaded routing table."""
        if self._table is None:
            raise RuntimeError("Routing config not loaded. Call load() first.")
        return self._table


class LoggingUsageAnalytics(IUsageAnalytics):
    """Writes one structured log line per routed question."""

    def __init__(self, logger_name: str = "askrexi.usage"):
        self._logger = get_logger(logger_name)

    async def record(self, record: UsageRecord) -> None:
        self._logger.info(
            "Question answered",
            extra={
                "domain": record.domain,
                "elapsed_ms": record.elapsed_ms,
                "question_prefix": record.question_prefix,
            }
        )
