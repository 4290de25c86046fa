"""
Bonus Engine Services Package.

Engine components (tier resolution, aggregation, scoring, forecast gate,
configuration guard) and the payout orchestrator that composes them.

The ``create_services()`` factory wires the services together, returning a
typed dict that the hosting layer (HTTP handler, job runner) can consume
without knowing the internal dependency graph.
"""

from __future__ import annotations

from typing import Optional, TypedDict

from upsell_bonus.config import AppConfig, get_config
from upsell_bonus.logger import StructuredLogger
from upsell_bonus.services.payout_orchestrator import PayoutOrchestrator


class ServiceContainer(TypedDict):
    """Typed container for all engine services."""

    payout_orchestrator: PayoutOrchestrator


def create_services(config: Optional[AppConfig] = None) -> ServiceContainer:
    """
    Wire all services together.

    Args:
        config: Application configuration; the cached ``get_config()``
            singleton is used when omitted.

    Returns:
        ``ServiceContainer`` with every service instantiated.
    """
    resolved_config: AppConfig = config or get_config()

    payout_logger = StructuredLogger(
        name="upsell_bonus.payouts",
        level=resolved_config.log_level,
    )

    return ServiceContainer(
        payout_orchestrator=PayoutOrchestrator(
            logger=payout_logger,
            config=resolved_config,
        ),
    )
