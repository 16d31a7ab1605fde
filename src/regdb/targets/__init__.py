"""Target builders: register documents to semantic trees."""

from __future__ import annotations

from regdb.targets.enrichment import classify, icon_for
from regdb.targets.esphome import build_esphome
from regdb.targets.homeassistant import build_homeassistant, build_unlock_automation

__all__ = [
    "build_esphome",
    "build_homeassistant",
    "build_unlock_automation",
    "classify",
    "icon_for",
]
