"""In-memory mission planning model for a flood-response drone fleet."""

from flood_mission_planner.constants import SERVICE_VERSION

__version__ = SERVICE_VERSION
