"""voxroute - intent resolution adapter for voice-driven terminals."""

__version__ = "0.1.0"
__logo__ = "🎙️"
