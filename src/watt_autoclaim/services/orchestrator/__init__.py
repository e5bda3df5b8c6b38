"""Run orchestration."""

from watt_autoclaim.services.orchestrator.claim_and_sell import ClaimAndSellOrchestrator

__all__ = ["ClaimAndSellOrchestrator"]
