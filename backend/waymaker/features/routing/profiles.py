"""Hiking profile catalog and transport modes: reads hiking_profiles.yaml and maps profiles to routing parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .client import DEFAULT_PROFILE


@dataclass
class PathPreferences:
    """Which kinds of trails the hiker accepts."""

    prefer_official: bool = False
    allow_unofficial: bool = True
    no_preference: bool = True


@dataclass
class HikingProfile:
    """A named set of path preferences."""

    id: str
    name: str
    description: str = ""
    color: str | None = None
    preferences: PathPreferences = field(default_factory=PathPreferences)

    def routing_options(self) -> dict[str, Any]:
        """ORS route options for these preferences."""
        prefs = self.preferences

        if prefs.prefer_official and not prefs.allow_unofficial:
            return {"avoid_features": ["steps", "ferries"]}
        if prefs.prefer_official and prefs.allow_unofficial:
            return {"avoid_features": ["ferries"]}
        if prefs.no_preference:
            return {"avoid_features": []}
        return {"avoid_features": ["ferries"]}


def routing_params(profile: HikingProfile | None) -> tuple[str, dict[str, Any]]:
    """
    Routing service profile name and options for a hiking profile.

    No profile means the plain foot-hiking profile without options.
    """
    if profile is None:
        return DEFAULT_PROFILE, {}
    return DEFAULT_PROFILE, profile.routing_options()


@dataclass(frozen=True)
class TransportMode:
    """A routing service travel profile offered for A to B routes."""

    id: str
    label: str
    color: str


TRANSPORT_MODES: tuple[TransportMode, ...] = (
    TransportMode("cycling-regular", "Regular bike", "#2563eb"),
    TransportMode("cycling-mountain", "Mountain bike", "#7c3aed"),
    TransportMode("cycling-electric", "E-bike", "#ea580c"),
    TransportMode(DEFAULT_PROFILE, "Hiking", "#16a34a"),
)


def transport_mode(mode_id: str) -> TransportMode | None:
    return next((m for m in TRANSPORT_MODES if m.id == mode_id), None)


class HikingProfileCatalog:
    """Loads and provides access to hiking profiles from YAML."""

    FILENAME = "hiking_profiles.yaml"

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir
        self._profiles: list[HikingProfile] | None = None

    def load(self) -> list[HikingProfile]:
        """Load catalog from hiking_profiles.yaml."""
        yaml_path = self.content_dir / self.FILENAME
        if not yaml_path.exists():
            return []

        with open(yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        profiles = []
        for p in data.get("profiles", []):
            prefs = p.get("preferences", {})
            profiles.append(
                HikingProfile(
                    id=p["id"],
                    name=p["name"],
                    description=p.get("description", ""),
                    color=p.get("color"),
                    preferences=PathPreferences(
                        prefer_official=prefs.get("prefer_official", False),
                        allow_unofficial=prefs.get("allow_unofficial", True),
                        no_preference=prefs.get("no_preference", True),
                    ),
                )
            )

        self._profiles = profiles
        return profiles

    @property
    def profiles(self) -> list[HikingProfile]:
        if self._profiles is None:
            self.load()
        return self._profiles or []

    @property
    def default(self) -> HikingProfile | None:
        return self.profiles[0] if self.profiles else None

    def get(self, profile_id: str | None) -> HikingProfile | None:
        if profile_id is None:
            return None
        return next((p for p in self.profiles if p.id == profile_id), None)
