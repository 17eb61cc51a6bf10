"""Ingestion services: file -> validated calculation inputs."""

from budget_ingestion.services.import_service import CalculationInputs, load_calculation_inputs

__all__ = ["CalculationInputs", "load_calculation_inputs"]
