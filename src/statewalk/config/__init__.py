"""Configuration for statewalk."""

from statewalk.config.settings import StatewalkSettings, default_settings, load_settings

__all__ = ["StatewalkSettings", "default_settings", "load_settings"]
