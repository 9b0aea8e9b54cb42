"""
Inspect and edit host configuration: APT sources, autostart entries, LaunchAgents and Homebrew taps.
"""

__all__ = ["apt", "autostart", "backends", "cli", "homebrew", "launchd", "mutator"]
__version__ = "0.1.0"
