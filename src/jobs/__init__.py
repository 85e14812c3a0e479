"""Jobs module for scheduled tasks."""

from src.jobs import scheduler
from src.jobs.broadcaster import Broadcaster
from src.jobs.harvester import Harvester, HarvestState

__all__ = ["Broadcaster", "Harvester", "HarvestState", "scheduler"]
