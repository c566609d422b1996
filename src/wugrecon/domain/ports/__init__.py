from __future__ import annotations

from .resources import Observation, ResourceGateway, Submission

__all__ = ["Observation", "ResourceGateway", "Submission"]
